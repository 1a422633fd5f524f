from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TRACKCODEC_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _load_env() -> None:
    # Load .env from the working directory if present
    load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class EncoderOptions:
    """Immutable option snapshot read by every encode/decode call."""

    include_artwork: bool = True
    include_isrc: bool = True
    source_name: str = "unknown"
    validate: bool = True
    max_tracks: int = 1000  # 0 = unlimited

    def __post_init__(self) -> None:
        if not isinstance(self.source_name, str):
            raise ValueError("source_name must be a string")
        if isinstance(self.max_tracks, bool) or not isinstance(self.max_tracks, int):
            raise ValueError("max_tracks must be an integer")
        if self.max_tracks < 0:
            raise ValueError("max_tracks must be >= 0")

    @classmethod
    def from_env(cls) -> "EncoderOptions":
        """Build options from TRACKCODEC_* variables (and .env when present).

        Recognised variables:
        - TRACKCODEC_INCLUDE_ARTWORK
        - TRACKCODEC_INCLUDE_ISRC
        - TRACKCODEC_SOURCE_NAME
        - TRACKCODEC_VALIDATE
        - TRACKCODEC_MAX_TRACKS
        """
        _load_env()
        defaults = cls()
        max_tracks = _getenv("MAX_TRACKS")
        return cls(
            include_artwork=_env_bool("INCLUDE_ARTWORK", defaults.include_artwork),
            include_isrc=_env_bool("INCLUDE_ISRC", defaults.include_isrc),
            source_name=_getenv("SOURCE_NAME") or defaults.source_name,
            validate=_env_bool("VALIDATE", defaults.validate),
            max_tracks=_parse_int(max_tracks, "MAX_TRACKS") if max_tracks else defaults.max_tracks,
        )


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return None
    return value.strip() or None


def _env_bool(name: str, default: bool) -> bool:
    raw = _getenv(name)
    if raw is None:
        return default
    v = raw.lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
