from __future__ import annotations

from typing import Optional, Protocol


class FaceRecognizer(Protocol):
    """Opaque face-recognition capability.

    Compares a captured image (or client-side fingerprint) with the user's
    enrolled template and returns a confidence in [0, 1], or None when no
    comparison was possible.
    """

    def match_confidence(self, user_id: str, captured: bytes) -> Optional[float]:
        raise NotImplementedError
