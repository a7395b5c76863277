"""
Unit tests for data URI encoding and parsing.
"""

import base64

import pytest

from klse_blogger.exceptions import InvalidDataUriError, ReportReadError
from klse_blogger.services.data_uri import encode_data_uri, parse_data_uri
from klse_blogger.services.report_upload import ReportFile, file_to_data_uri


class TestFileToDataUri:
    """Tests for encoding an uploaded report."""

    async def test_data_uri_prefix(self, pdf_file):
        data_uri = await file_to_data_uri(pdf_file)
        assert data_uri.startswith("data:application/pdf;base64,")

    async def test_payload_decodes_to_original_bytes(self, pdf_file, pdf_bytes):
        data_uri = await file_to_data_uri(pdf_file)
        payload = data_uri.split(",", 1)[1]
        assert base64.b64decode(payload) == pdf_bytes

    async def test_read_is_repeatable(self, pdf_file):
        first = await file_to_data_uri(pdf_file)
        second = await file_to_data_uri(pdf_file)
        assert first == second

    async def test_closed_stream_raises_read_error(self, pdf_file):
        pdf_file.file.close()
        with pytest.raises(ReportReadError):
            await file_to_data_uri(pdf_file)

class TestParseDataUri:
    """Tests for splitting a data URI back into MIME type and bytes."""

    def test_parse_encoded_report(self, pdf_bytes):
        mime_type, content = parse_data_uri(encode_data_uri(pdf_bytes, "application/pdf"))
        assert mime_type == "application/pdf"
        assert content == pdf_bytes

    @pytest.mark.parametrize(
        "data_uri",
        [
            "",
            "JVBERi0xLjQ=",
            "data:application/pdf,JVBERi0xLjQ=",
            "data:;base64,JVBERi0xLjQ=",
            "data:application/pdf;base64,",
            "https://example.com/report.pdf",
        ],
    )
    def test_malformed_uri_rejected(self, data_uri):
        with pytest.raises(InvalidDataUriError):
            parse_data_uri(data_uri)

    def test_bad_padding_rejected(self):
        with pytest.raises(InvalidDataUriError):
            parse_data_uri("data:application/pdf;base64,JVBERi0xLjQ")

class TestReportFile:

    def test_size_kb(self):
        report = ReportFile.from_bytes("big.pdf", "application/pdf", b"x" * 2048)
        assert report.size == 2048
        assert report.size_kb == "2.00"

    def test_missing_content_type(self):
        report = ReportFile.from_bytes("unknown", None, b"")
        assert report.content_type == ""
