from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.templating import Jinja2Templates
from loguru import logger
from pydantic import ValidationError

from klse_blogger.exceptions import ReportAnalysisError
from klse_blogger.schemas.analyze import (
    AnalysisFormValues,
    AnalyzeReportInput,
    AnalyzeReportOutput,
    GeminiModel,
)
from klse_blogger.services.analyze_report import analyze_klse_report
from klse_blogger.services.report_upload import PDF_MIME_TYPE, ReportFile, ReportUploadState
from klse_blogger.settings import settings

router = APIRouter(tags=["Analyze KLSE Report"])

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

INVALID_MODEL_MESSAGE = "请选择 gemini-2.5-pro 或 gemini-2.5-flash。"


def form_field_errors(error: ValidationError) -> dict:
    """Map form validation errors to the inline message shown under each field."""
    field_errors = {}
    for err in error.errors():
        field = err["loc"][0] if err["loc"] else "__root__"
        if field == "model":
            field_errors[field] = INVALID_MODEL_MESSAGE
        elif "ctx" in err and "error" in err["ctx"]:
            field_errors[field] = str(err["ctx"]["error"])
        else:
            field_errors[field] = err["msg"]
    return field_errors


def render_page(request: Request, state: ReportUploadState, model: str = "", field_errors: Optional[dict] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "state": state,
            "pdf_mime_type": PDF_MIME_TYPE,
            "model": model or settings.DEFAULT_GEMINI_MODEL,
            "models": [m.value for m in GeminiModel],
            "field_errors": field_errors or {},
            "progress_interval_ms": int(settings.PROGRESS_INTERVAL_SECONDS * 1000),
            "progress_step": settings.PROGRESS_STEP,
            "progress_ceiling": settings.PROGRESS_CEILING,
        },
        status_code=status_code,
    )


@router.get("/")
async def upload_page(request: Request):
    """
    Renders the upload form. Every visit starts from a fresh page state,
    so the result view's "analyze another report" link doubles as reset.
    """
    return render_page(request, ReportUploadState())


@router.post("/")
async def submit_report(
    request: Request,
    api_key: str = Form(""),
    model: str = Form(GeminiModel.FLASH.value),
    file: Optional[UploadFile] = File(None),
):
    """
    Validates the form, encodes the uploaded PDF and renders either the generated blog post
    or the upload form with the error and notifications.
    """
    state = ReportUploadState()
    if file is not None and file.filename:
        state.select_file(ReportFile.from_upload(file))

    try:
        values = AnalysisFormValues(api_key=api_key, model=model)
    except ValidationError as e:
        logger.info("Submission blocked by form validation.")
        return render_page(request, state, model=model, field_errors=form_field_errors(e), status_code=422)

    await state.submit(values, analyzer=analyze_klse_report)
    return render_page(request, state, model=values.model.value)


@router.post("/api/analyze", response_model=AnalyzeReportOutput)
async def analyze_report_endpoint(request: AnalyzeReportInput):
    """
    Analyzes a KLSE quarterly report (PDF data URI) and returns the generated blog post HTML.
    """
    try:
        return await analyze_klse_report(request)
    except ReportAnalysisError as e:
        raise HTTPException(status_code=502, detail=str(e))
