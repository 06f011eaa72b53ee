from __future__ import annotations

from typing import Optional


def is_face_valid(confidence: Optional[float], threshold: float) -> bool:
    """Accept a face match when confidence reaches the configured threshold.

    None means recognition was unavailable or the user has no enrolled face,
    which never passes.
    """
    if confidence is None:
        return False
    return confidence >= threshold
