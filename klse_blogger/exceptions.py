class KLSEBloggerError(Exception):
    """Base error for the report blogger."""


class ReportReadError(KLSEBloggerError):
    """The uploaded report could not be read."""


class InvalidDataUriError(KLSEBloggerError):
    pass


class ReportAnalysisError(KLSEBloggerError):
    """The Gemini call failed or returned output that doesn't match AnalyzeReportOutput."""
