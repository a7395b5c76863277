import pytest

from klse_blogger.schemas.analyze import AnalyzeReportOutput
from klse_blogger.services.report_upload import ReportFile

SAMPLE_PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"

SAMPLE_BLOG_HTML = (
    '<div class="highlight"><p>本季度营收达到 <span class="data-point">RM 120.5 百万</span>。</p></div>'
    '<div class="conclusion"><h2>总结与投资建议</h2><p>业绩稳健。</p><ol><li>原材料成本上涨</li></ol></div>'
)


@pytest.fixture
def pdf_file():
    return ReportFile.from_bytes("Q3-2025-quarterly-report.pdf", "application/pdf", SAMPLE_PDF_BYTES)


@pytest.fixture
def text_file():
    return ReportFile.from_bytes("notes.txt", "text/plain", b"not a report")


@pytest.fixture
def blog_output():
    return AnalyzeReportOutput(blog_post_html=SAMPLE_BLOG_HTML)


@pytest.fixture
def pdf_bytes():
    return SAMPLE_PDF_BYTES


@pytest.fixture
def blog_html():
    return SAMPLE_BLOG_HTML
