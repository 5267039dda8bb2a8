"""Unit tests for review data sources."""

import json

import httpx
import pytest

from tdd_review.parsers import MalformedPayloadError, SourceUnavailableError
from tdd_review.sources import (
    FileReviewSource,
    HttpReviewSource,
    TextReviewSource,
    interpret_payload,
)


def mock_client(handler):
    """Create an httpx client backed by a mock transport."""
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestInterpretPayload:
    """Tests for recognising CSV bodies and JSON envelopes."""

    def test_csv_body(self):
        """Test that plain text is treated as CSV."""
        payload = interpret_payload("section_name,original_text\n", "src")

        assert payload.is_csv
        assert payload.csv_text == "section_name,original_text\n"
        assert payload.source == "src"

    def test_envelope_with_records(self, sample_records):
        """Test that a data list becomes records."""
        payload = interpret_payload(json.dumps({"data": sample_records}), "src")

        assert not payload.is_csv
        assert payload.records == sample_records

    def test_envelope_with_csv_string(self):
        """Test that a data string becomes CSV text."""
        payload = interpret_payload(json.dumps({"data": "a,b,c,d,e"}), "src")

        assert payload.is_csv
        assert payload.csv_text == "a,b,c,d,e"

    def test_envelope_without_data(self):
        """Test that an envelope without data is rejected."""
        with pytest.raises(MalformedPayloadError) as exc_info:
            interpret_payload(json.dumps({"rows": []}), "src")

        assert exc_info.value.details["keys"] == ["rows"]
        assert exc_info.value.source == "src"

    def test_envelope_with_wrong_type(self):
        """Test that an unusable data member is rejected."""
        with pytest.raises(MalformedPayloadError, match="Unsupported"):
            interpret_payload(json.dumps({"data": 42}), "src")

    def test_brace_that_is_not_json(self):
        """Test that a body starting with a brace but not JSON is CSV."""
        payload = interpret_payload("{Page 1},a,b,c,d", "src")

        assert payload.is_csv


class TestHttpReviewSource:
    """Tests for fetching review data over HTTP."""

    def test_fetch_csv(self, sample_csv):
        """Test a successful CSV fetch."""
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text=sample_csv)

        source = HttpReviewSource("http://backend:8000/", client=mock_client(handler))

        payload = source.fetch()

        assert requested == ["http://backend:8000/api/review-data"]
        assert payload.csv_text == sample_csv
        assert source.describe() == "http://backend:8000/api/review-data"

    def test_fetch_envelope(self, sample_records):
        """Test a successful JSON envelope fetch."""
        source = HttpReviewSource(
            "http://backend",
            client=mock_client(lambda request: httpx.Response(200, json={"data": sample_records})),
        )

        payload = source.fetch()

        assert len(payload.records) == 8

    def test_http_error_status(self):
        """Test that error statuses raise SourceUnavailableError."""
        source = HttpReviewSource(
            "http://backend",
            client=mock_client(lambda request: httpx.Response(503, text="unavailable")),
        )

        with pytest.raises(SourceUnavailableError) as exc_info:
            source.fetch()

        assert exc_info.value.status_code == 503
        assert "HTTP 503" in str(exc_info.value)

    def test_transport_error(self):
        """Test that connection failures raise SourceUnavailableError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = HttpReviewSource("http://backend", client=mock_client(handler))

        with pytest.raises(SourceUnavailableError) as exc_info:
            source.fetch()

        assert exc_info.value.details["error_type"] == "ConnectError"
        assert exc_info.value.status_code is None

    def test_base_url_required(self):
        """Test that an empty base URL is rejected."""
        with pytest.raises(ValueError):
            HttpReviewSource("")


class TestFileReviewSource:
    """Tests for reading review data from disk."""

    def test_read_file(self, tmp_path, sample_csv):
        """Test reading a CSV export."""
        path = tmp_path / "review.csv"
        path.write_text(sample_csv, encoding="utf-8")

        payload = FileReviewSource(path).fetch()

        assert payload.csv_text == sample_csv
        assert payload.source == str(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported as unavailable."""
        with pytest.raises(SourceUnavailableError, match="not found"):
            FileReviewSource(tmp_path / "missing.csv").fetch()

    def test_error_to_dict(self, tmp_path):
        """Test the serialized form of a source error."""
        with pytest.raises(SourceUnavailableError) as exc_info:
            FileReviewSource(tmp_path / "missing.csv").fetch()

        data = exc_info.value.to_dict()
        assert data["error_type"] == "SourceUnavailableError"
        assert data["source"].endswith("missing.csv")


class TestTextReviewSource:
    """Tests for in-memory sources."""

    def test_text_source(self):
        """Test that the body is interpreted like a fetched one."""
        source = TextReviewSource("a,b,c,d,e", label="posted")

        payload = source.fetch()

        assert payload.csv_text == "a,b,c,d,e"
        assert source.describe() == "posted"
