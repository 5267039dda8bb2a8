"""HTTP API for the TDD review data library."""
