class ReportError(Exception):
    """Base exception for all report-store errors."""


class ReportNotFoundError(ReportError):
    """Raised when no report document exists for a job id."""


class MalformedReportError(ReportError):
    """Raised when a report is not a valid, serializable JSON object."""
