import asyncio
import io
from typing import Awaitable, BinaryIO, Callable, List, Optional

from fastapi import UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool

from klse_blogger.exceptions import ReportReadError
from klse_blogger.schemas.analyze import (
    AnalysisFormValues,
    AnalyzeReportInput,
    AnalyzeReportOutput,
    Notification,
)
from klse_blogger.services.analyze_report import analyze_klse_report
from klse_blogger.services.data_uri import encode_data_uri
from klse_blogger.settings import settings

PDF_MIME_TYPE = "application/pdf"

MISSING_FILE_MESSAGE = "请上传一份季度报告 PDF。"
UNKNOWN_ERROR_MESSAGE = "发生未知错误。"
EMPTY_FILE_MESSAGE = "文件为空，请上传有效的 PDF 文件。"

Analyzer = Callable[[AnalyzeReportInput], Awaitable[AnalyzeReportOutput]]


class ReportFile:
    """An uploaded report: name, declared MIME type and a readable binary stream."""

    def __init__(self, filename: str, content_type: Optional[str], file: BinaryIO):
        self.filename = filename
        self.content_type = content_type or ""
        self.file = file

    @classmethod
    def from_bytes(cls, filename: str, content_type: Optional[str], content: bytes) -> "ReportFile":
        return cls(filename, content_type, io.BytesIO(content))

    @classmethod
    def from_upload(cls, upload: UploadFile) -> "ReportFile":
        return cls(upload.filename or "report.pdf", upload.content_type, upload.file)

    @property
    def size(self) -> int:
        position = self.file.tell()
        self.file.seek(0, io.SEEK_END)
        size = self.file.tell()
        self.file.seek(position)
        return size

    @property
    def size_kb(self) -> str:
        return f"{self.size / 1024:.2f}"

    def _read_all(self) -> bytes:
        self.file.seek(0)
        return self.file.read()

    async def read(self) -> bytes:
        try:
            return await run_in_threadpool(self._read_all)
        except (OSError, ValueError) as e:
            raise ReportReadError(f"无法读取文件 {self.filename}: {e}") from e


async def file_to_data_uri(report_file: ReportFile) -> str:
    """
    Read the report and encode it as 'data:<mimetype>;base64,<encoded_data>'.
    Raises ReportReadError if the underlying stream can't be read.
    """
    content = await report_file.read()
    if not content:
        raise ReportReadError(EMPTY_FILE_MESSAGE)
    return encode_data_uri(content, report_file.content_type)


class ReportUploadState:
    """
    State behind the single page: selected file, cosmetic progress, error,
    rendered result and the notifications (toasts) raised along the way.

    The page is rendered once submit returns, so the progress ticker is never
    shown from here; the browser animates its own bar with the same step,
    interval and ceiling. The ticker keeps the state the page mirrors.
    """

    def __init__(
        self,
        progress_interval: Optional[float] = None,
        progress_step: Optional[int] = None,
        progress_ceiling: Optional[int] = None,
    ):
        self.progress_interval = settings.PROGRESS_INTERVAL_SECONDS if progress_interval is None else progress_interval
        self.progress_step = settings.PROGRESS_STEP if progress_step is None else progress_step
        self.progress_ceiling = settings.PROGRESS_CEILING if progress_ceiling is None else progress_ceiling
        self.notifications: List[Notification] = []
        self.reset()

    def reset(self):
        self.file: Optional[ReportFile] = None
        self.is_loading = False
        self.progress = 0
        self.result: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def view(self) -> str:
        if self.is_loading:
            return "loading"
        if self.result:
            return "result"
        return "upload"

    def toast(self, title: str, description: str, variant: str = "default"):
        self.notifications.append(Notification(variant=variant, title=title, description=description))

    def select_file(self, report_file: ReportFile) -> bool:
        if report_file.content_type != PDF_MIME_TYPE:
            logger.warning(f"Rejected {report_file.filename!r}: declared type {report_file.content_type!r}")
            self.toast("文件类型无效", "请上传 PDF 格式的文件。", variant="destructive")
            return False
        if report_file.size == 0:
            logger.warning(f"Rejected {report_file.filename!r}: empty file")
            self.toast("文件为空", EMPTY_FILE_MESSAGE, variant="destructive")
            return False
        logger.info(f"Selected {report_file.filename!r} ({report_file.size_kb} KB).")
        self.error = None
        self.file = report_file
        return True

    async def _tick_progress(self):
        while self.progress < self.progress_ceiling:
            await asyncio.sleep(self.progress_interval)
            self.progress = min(self.progress + self.progress_step, self.progress_ceiling)

    async def submit(self, values: AnalysisFormValues, analyzer: Analyzer = analyze_klse_report):
        if self.file is None:
            self.error = MISSING_FILE_MESSAGE
            return

        self.error = None
        self.result = None
        self.is_loading = True
        self.progress = 0
        ticker = asyncio.create_task(self._tick_progress())

        try:
            report_data_uri = await file_to_data_uri(self.file)
            output = await analyzer(
                AnalyzeReportInput(
                    report_data_uri=report_data_uri,
                    gemini_model=values.model,
                    api_key=values.api_key,
                )
            )
            self.result = output.blog_post_html
            self.progress = 100
        except Exception as e:
            logger.error(f"Report analysis failed for {self.file.filename!r}: {e}")
            self.error = f"分析失败：{str(e) or UNKNOWN_ERROR_MESSAGE}"
            self.toast(
                "分析出错",
                "无法分析报告。请检查您的 API 密钥和文件，然后重试。",
                variant="destructive",
            )
        finally:
            ticker.cancel()
            try:
                await ticker
            except asyncio.CancelledError:
                pass
            self.is_loading = False
