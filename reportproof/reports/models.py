from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Report:
    """An analysis report as stored by the upstream analysis process.

    Only a handful of keys are recognized; everything else is carried along
    untouched because the whole document is part of the fingerprint.
    """

    ATTACHMENT_FIELDS: ClassVar[tuple[str, ...]] = (
        "cumulative_analysis_csv",
        "particle_distribution_csv",
        "rejection_analysis_display_csv",
    )

    data: dict[str, Any]

    @property
    def job_id(self) -> str:
        return str(self.data.get("jobId", ""))

    @property
    def username(self) -> str:
        return str(self.data.get("username") or "")

    @property
    def product_name(self) -> str:
        return str(self.data.get("productName") or "")

    def attachment_urls(self) -> list[str]:
        """Return present, non-empty attachment URLs in declared field order."""
        results = self.data.get("results")
        if not isinstance(results, Mapping):
            return []
        return [
            str(results[name])
            for name in self.ATTACHMENT_FIELDS
            if results.get(name)
        ]
