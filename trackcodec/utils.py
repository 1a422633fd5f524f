from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, TypeVar
from urllib.parse import urlparse

from .types import (
    SOURCE_BANDCAMP,
    SOURCE_SOUNDCLOUD,
    SOURCE_SPOTIFY,
    SOURCE_TWITCH,
    SOURCE_UNKNOWN,
    SOURCE_YOUTUBE,
    EncodedTrack,
    Playlist,
)

T = TypeVar("T")


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def chunked(seq: Sequence[T] | Iterable[T], n: int) -> Iterator[List[T]]:
    """Yield lists of size n from a sequence/iterable."""
    if n <= 0:
        raise ValueError("n must be > 0")
    buf: List[T] = []
    for item in seq:
        buf.append(item)
        if len(buf) >= n:
            yield buf
            buf = []
    if buf:
        yield buf


def format_duration(ms: int) -> str:
    """m:ss below one hour, h:mm:ss above."""
    s = int(ms) // 1000
    m, s = divmod(s, 60)
    h, m = divmod(m, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_duration_from_seconds(seconds: int) -> str:
    return format_duration(seconds * 1000)


def seconds_to_milliseconds(seconds: int | float) -> int:
    return int(seconds * 1000)


def milliseconds_to_seconds(ms: int) -> int:
    return int(ms) // 1000


def normalize_str(s: str | None) -> str:
    return (s or "").strip().lower()


def brief_id(s: str, prefix: int = 3, suffix: int = 2) -> str:
    if len(s) <= prefix + suffix + 3:
        return s
    return f"{s[:prefix]}...{s[-suffix:]}"


def is_valid_url(url: str | None) -> bool:
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


_youtube_res = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
]
_spotify_re = re.compile(r"spotify\.com/track/([a-zA-Z0-9]+)")
_soundcloud_re = re.compile(r"soundcloud\.com/([^/]+)/([^/?]+)")


def extract_youtube_video_id(url: str) -> Optional[str]:
    for pattern in _youtube_res:
        m = pattern.search(url)
        if m:
            return m.group(1)
    return None


def extract_spotify_track_id(url: str) -> Optional[str]:
    m = _spotify_re.search(url)
    return m.group(1) if m else None


def extract_soundcloud_track_id(url: str) -> Optional[str]:
    """Return `user/track-slug` for a SoundCloud track URL."""
    m = _soundcloud_re.search(url)
    return f"{m.group(1)}/{m.group(2)}" if m else None


def detect_track_source(uri: str) -> str:
    if "youtube.com" in uri or "youtu.be" in uri:
        return SOURCE_YOUTUBE
    if "spotify.com" in uri:
        return SOURCE_SPOTIFY
    if "soundcloud.com" in uri:
        return SOURCE_SOUNDCLOUD
    if "twitch.tv" in uri:
        return SOURCE_TWITCH
    if "bandcamp.com" in uri:
        return SOURCE_BANDCAMP
    return SOURCE_UNKNOWN


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def sanitize_track_title(title: str, max_length: int = 100) -> str:
    return _truncate(title, max_length)


def sanitize_author_name(author: str, max_length: int = 50) -> str:
    return _truncate(author, max_length)


def create_track_summary(track: EncodedTrack) -> str:
    return f"{track.info.title} by {track.info.author} ({format_duration(track.info.length)})"


def create_playlist_summary(playlist: Playlist) -> str:
    total = sum(t.info.length for t in playlist.tracks)
    return f"{playlist.name} - {len(playlist.tracks)} tracks ({format_duration(total)})"


def extract_track_metadata(track: Any) -> Dict[str, Dict[str, Any]]:
    """Split a decoded (or plain) track into display groups with fallbacks for missing fields."""
    length = getattr(track, "length", None) or 0
    position = getattr(track, "position", None)
    try:
        position = int(position or 0)
    except (TypeError, ValueError):
        position = 0
    return {
        "basic": {
            "title": getattr(track, "title", None) or "Unknown Title",
            "author": getattr(track, "author", None) or "Unknown Artist",
            "duration": format_duration(length),
            "source": getattr(track, "source_name", None) or SOURCE_UNKNOWN,
        },
        "technical": {
            "identifier": getattr(track, "identifier", None) or "",
            "uri": getattr(track, "uri", None) or "",
            "is_seekable": bool(getattr(track, "is_seekable", False)),
            "is_stream": bool(getattr(track, "is_stream", False)),
            "position": position,
        },
        "optional": {
            "artwork_url": getattr(track, "artwork_url", None),
            "isrc": getattr(track, "isrc", None),
        },
    }
