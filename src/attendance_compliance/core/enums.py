from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles yielded by the identity provider."""

    KARYAWAN = "karyawan"
    KEPALA = "kepala"
    ADMIN = "admin"


class CheckType(str, Enum):
    """Kind of attendance event. ABSENT is only produced by the absence sweep."""

    MASUK = "masuk"
    KELUAR = "keluar"
    ABSENT = "absent"


class StatusCode(str, Enum):
    """Outcome of a classification. Exactly one per record, never changed."""

    BERHASIL = "berhasil"
    WAJAH_TIDAK_VALID = "wajah_tidak_valid"
    LOKASI_TIDAK_VALID = "lokasi_tidak_valid"
    TIDAK_HADIR = "tidak_hadir"


class SessionFlag(str, Enum):
    """Integrity markers attached to a keluar record by time accounting."""

    ORPHAN_CLOSE_OUT = "orphan_close_out"
    INCONSISTENT_SESSION = "inconsistent_session"


class Audience(str, Enum):
    SELF = "self"
    ALL = "all"
