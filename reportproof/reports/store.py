import json
from pathlib import Path

from reportproof.logging.logger import Log
from reportproof.reports.exceptions import MalformedReportError, ReportNotFoundError
from reportproof.reports.models import Report


def report_file_path(jobs_root: Path, job_id: str) -> Path:
    """Build path to report document: {jobs_root}/{job_id}.json"""
    return jobs_root / f"{job_id}.json"


class ReportStore:
    """Reads report documents from a directory keyed by job id."""

    JOBS_ROOT = Path("jobs")

    def __init__(self, jobs_root: Path | None = None) -> None:
        self._jobs_root = jobs_root if jobs_root is not None else self.JOBS_ROOT

    def load(self, job_id: str) -> Report:
        """Read and parse the report for a job.

        Raises:
            ReportNotFoundError: if no document exists for job_id.
            MalformedReportError: if the document is not a JSON object with a jobId.
        """
        path = report_file_path(self._jobs_root, job_id)
        if not path.is_file():
            raise ReportNotFoundError(f"Report not found for job '{job_id}': {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedReportError(f"Cannot parse report {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise MalformedReportError(f"Report {path} must be a JSON object")
        if not data.get("jobId"):
            raise MalformedReportError(f"Report {path} has no 'jobId'")

        Log.debug(f"Loaded report for job {job_id} from {path}")
        return Report(data=data)
