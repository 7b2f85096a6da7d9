import json
from pathlib import Path
from typing import Any

from reportproof.config.exceptions import ConfigMissingError
from reportproof.ledger.exceptions import MalformedAbiError

REPORT_FIELDS = ("jobId", "username", "productName", "uploadedBy", "timestamp", "reportHash")


def load_abi(path: Path) -> list[dict[str, Any]]:
    """Load a contract ABI that must be a plain JSON array.

    Raises:
        ConfigMissingError: if the file does not exist.
        MalformedAbiError: if the file is not a JSON array.
    """
    if not path.is_file():
        raise ConfigMissingError(f"ABI not found: {path}")
    try:
        abi = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise MalformedAbiError(f"Cannot parse ABI {path}: {exc}") from exc
    if not isinstance(abi, list):
        raise MalformedAbiError(f"ABI {path} must be a JSON array")
    return abi


def report_component_names(abi: list[dict[str, Any]]) -> list[str]:
    """Names of the struct fields returned by getReports, in ABI order.

    Raises:
        MalformedAbiError: if getReports or its struct components are missing,
            or a recognized report field is absent.
    """
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == "getReports":
            outputs = entry.get("outputs") or []
            if not outputs or not outputs[0].get("components"):
                break
            names = [component.get("name", "") for component in outputs[0]["components"]]
            missing = [name for name in REPORT_FIELDS if name not in names]
            if missing:
                raise MalformedAbiError(f"getReports struct lacks fields: {missing}")
            return names
    raise MalformedAbiError("ABI has no getReports function returning a struct array")
