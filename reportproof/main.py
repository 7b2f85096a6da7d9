import argparse
import sys
from pathlib import Path

from reportproof.config.exceptions import ConfigMissingError
from reportproof.config.settings import Settings
from reportproof.logging.logger import Log
from reportproof.workflows.models import Verified
from reportproof.workflows.verifier import build_verifier, find_artifact, report_outcome
from reportproof.workflows.writer import build_writer

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reportproof",
        description="Certify analysis reports on a blockchain ledger and verify them.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    write = commands.add_parser("write", help="fingerprint a report and store it on-chain")
    write.add_argument("--job-id", help="job to certify (default: SAMPLE_JOB_ID)")

    verify = commands.add_parser("verify", help="check a QR proof against the ledger")
    verify.add_argument(
        "--artifact",
        type=Path,
        help="QR image to verify (default: first PNG in QR_DIR)",
    )
    return parser.parse_args(argv)


def _write(settings: Settings, job_id: str | None) -> int:
    job_id = job_id or settings.sample_job_id
    if not job_id:
        raise ConfigMissingError("No job id given and SAMPLE_JOB_ID is not set")
    build_writer(settings).write(job_id)
    return EXIT_OK


def _verify(settings: Settings, artifact: Path | None) -> int:
    Log.info("Starting verification")
    artifact_path = artifact if artifact is not None else find_artifact(settings.qr_dir)
    result = build_verifier(settings).verify(artifact_path)
    report_outcome(result)
    return EXIT_OK if isinstance(result, Verified) else EXIT_MISMATCH


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run one workflow."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        if args.command == "write":
            return _write(settings, args.job_id)
        return _verify(settings, args.artifact)
    except Exception as exc:
        notes = "; ".join(getattr(exc, "__notes__", []))
        Log.error(f"{type(exc).__name__}: {exc}" + (f" ({notes})" if notes else ""))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
