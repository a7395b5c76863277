from langchain.chat_models import init_chat_model
from langchain_core.messages import HumanMessage
from loguru import logger
from pydantic import SecretStr

from klse_blogger.exceptions import ReportAnalysisError
from klse_blogger.schemas.analyze import AnalyzeReportInput, AnalyzeReportOutput, GeminiModel
from klse_blogger.services.data_uri import parse_data_uri
from klse_blogger.services.prompt_builder import build_klse_report_prompt
from klse_blogger.settings import settings


def build_llm(gemini_model: GeminiModel, api_key: SecretStr):
    """
    Gemini chat model bound to the caller's API key.
    The key is passed per call so concurrent submissions never share a credential.
    """
    return init_chat_model(
        model=gemini_model.value,
        model_provider="google_genai",
        temperature=settings.LLM_TEMPERATURE,
        api_key=api_key,
    )


def build_report_message(report_data_uri: str) -> HumanMessage:
    mime_type, content = parse_data_uri(report_data_uri)
    return HumanMessage(
        content=[
            {"type": "text", "text": build_klse_report_prompt()},
            {"type": "media", "mime_type": mime_type, "data": content},
        ]
    )


async def analyze_klse_report(request: AnalyzeReportInput) -> AnalyzeReportOutput:
    """
    Send the quarterly report and the blogging prompt to Gemini and return the generated blog post HTML.
    Any provider failure, or output that doesn't fit AnalyzeReportOutput, is raised as ReportAnalysisError.
    """
    logger.info(f"Analyzing KLSE report with {request.gemini_model.value}.")
    try:
        message = build_report_message(request.report_data_uri)
        llm = build_llm(request.gemini_model, request.api_key)
        structured_llm = llm.with_structured_output(AnalyzeReportOutput)
        output = await structured_llm.ainvoke([message])
    except Exception as e:
        logger.exception(f"Gemini analysis error: {e}")
        raise ReportAnalysisError(str(e)) from e

    if output is None:
        logger.error("Gemini returned no structured output.")
        raise ReportAnalysisError("模型未返回有效的博客内容。")

    logger.info(f"✅ Blog post generated: {len(output.blog_post_html)} characters.")
    return output
