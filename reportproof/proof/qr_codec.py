from pathlib import Path

import cv2
import numpy as np
import qrcode
from PIL import Image

from reportproof.logging.logger import Log
from reportproof.proof.exceptions import ArtifactDecodeError, ArtifactNotFoundError
from reportproof.proof.models import ProofArtifact
from reportproof.proof.payload import parse_payload, serialize_payload

# White margin added before detection so tight borders still decode.
_QUIET_ZONE_PX = 40


def artifact_file_path(qr_root: Path, job_id: str) -> Path:
    """Build path to proof artifact image: {qr_root}/job-{job_id}.png"""
    return qr_root / f"job-{job_id}.png"


class QrProofArtifactCodec:
    """Writes proof artifacts as QR code PNGs and reads them back."""

    def __init__(self, *, box_size: int = 10, border: int = 2) -> None:
        self._box_size = box_size
        self._border = border

    def encode(self, artifact: ProofArtifact, path: Path) -> Path:
        """Render artifact into a PNG at path, creating parent directories."""
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(serialize_payload(artifact))
        qr.make(fit=True)

        path.parent.mkdir(parents=True, exist_ok=True)
        qr.make_image(fill_color="black", back_color="white").save(path)
        Log.info(f"QR code saved -> {path}")
        return path

    def decode(self, path: Path) -> ProofArtifact:
        """Read a QR image and parse its payload.

        Raises:
            ArtifactNotFoundError: if path does not exist.
            ArtifactDecodeError: if the image is unreadable, holds no QR code,
                or the payload is malformed.
        """
        if not path.is_file():
            raise ArtifactNotFoundError(f"Proof artifact not found: {path}")

        try:
            with Image.open(path) as image:
                pixels = np.array(image.convert("L"))
        except OSError as exc:
            raise ArtifactDecodeError(f"Cannot read image {path}: {exc}") from exc

        padded = cv2.copyMakeBorder(
            pixels,
            _QUIET_ZONE_PX,
            _QUIET_ZONE_PX,
            _QUIET_ZONE_PX,
            _QUIET_ZONE_PX,
            cv2.BORDER_CONSTANT,
            value=255,
        )
        text, _points, _straight = cv2.QRCodeDetector().detectAndDecode(padded)
        if not text:
            raise ArtifactDecodeError(f"QR decode failed for {path}")
        return parse_payload(text)
