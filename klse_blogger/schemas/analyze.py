import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

# data:<mimetype>;base64,<encoded_data>
DATA_URI_PATTERN = re.compile(r"^data:(?P<mime_type>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/]+={0,2})$")

API_KEY_REQUIRED_MESSAGE = "Google Gemini API 密钥是必需的。"


class GeminiModel(str, Enum):
    PRO = "gemini-2.5-pro"
    FLASH = "gemini-2.5-flash"


class AnalyzeReportInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    report_data_uri: str = Field(
        ...,
        alias="reportDataUri",
        description=(
            "A KLSE quarterly report PDF, as a data URI that must include a MIME type and use Base64 encoding. "
            "Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )
    gemini_model: GeminiModel = Field(GeminiModel.FLASH, alias="geminiModel", description="The Gemini model to use for analysis.")
    api_key: SecretStr = Field(..., alias="apiKey", description="Your Google Gemini API key.")

    @field_validator("report_data_uri")
    @classmethod
    def check_data_uri(cls, value: str) -> str:
        if not DATA_URI_PATTERN.match(value):
            raise ValueError("reportDataUri must look like 'data:<mimetype>;base64,<encoded_data>'")
        return value

    @field_validator("api_key")
    @classmethod
    def check_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("apiKey must not be empty")
        return value


class AnalyzeReportOutput(BaseModel):
    """The generated blog post in HTML format."""
    model_config = ConfigDict(populate_by_name=True)

    blog_post_html: str = Field(
        ...,
        alias="blogPostHtml",
        min_length=1,
        description="The generated blog post in HTML format.",
    )


class AnalysisFormValues(BaseModel):
    api_key: str = ""
    model: GeminiModel = GeminiModel.FLASH

    @field_validator("api_key")
    @classmethod
    def api_key_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(API_KEY_REQUIRED_MESSAGE)
        return value


class Notification(BaseModel):
    variant: Literal["default", "destructive"] = "default"
    title: str
    description: str
