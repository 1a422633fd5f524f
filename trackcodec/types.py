from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


# Wire keys, in the order the encoder writes them
WIRE_FIELDS = (
    "identifier",
    "isSeekable",
    "author",
    "length",
    "isStream",
    "position",
    "title",
    "uri",
    "sourceName",
    "artworkUrl",
    "isrc",
)

_ATTR_BY_WIRE = {
    "identifier": "identifier",
    "isSeekable": "is_seekable",
    "author": "author",
    "length": "length",
    "isStream": "is_stream",
    "position": "position",
    "title": "title",
    "uri": "uri",
    "sourceName": "source_name",
    "artworkUrl": "artwork_url",
    "isrc": "isrc",
}


@dataclass(frozen=True)
class TrackInfo:
    """Metadata describing one audio item. `length == 0` marks a live stream."""
    identifier: str
    title: str
    author: str
    length: int
    uri: str
    is_seekable: bool
    is_stream: bool
    position: int = 0
    source_name: str = ""
    artwork_url: Optional[str] = None
    isrc: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrackInfo":
        return cls(
            identifier=data.get("identifier", ""),
            title=data.get("title", ""),
            author=data.get("author", ""),
            length=data.get("length", 0),
            uri=data.get("uri", ""),
            is_seekable=bool(data.get("isSeekable", False)),
            is_stream=bool(data.get("isStream", False)),
            position=data.get("position", 0),
            source_name=data.get("sourceName", "") or "",
            artwork_url=data.get("artworkUrl"),
            isrc=data.get("isrc"),
        )


@dataclass(frozen=True)
class DecodedTrack:
    """What a token carried. Nothing here has been checked."""
    identifier: Optional[str] = None
    title: Optional[str] = None
    author: Optional[str] = None
    length: Optional[int] = None
    uri: Optional[str] = None
    is_seekable: Optional[bool] = None
    is_stream: Optional[bool] = None
    position: Optional[int] = None
    source_name: Optional[str] = None
    artwork_url: Optional[str] = None
    isrc: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DecodedTrack":
        # unknown keys are dropped
        kwargs = {attr: payload[key] for key, attr in _ATTR_BY_WIRE.items() if key in payload}
        return cls(**kwargs)


def _to_wire(obj) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in WIRE_FIELDS:
        value = getattr(obj, _ATTR_BY_WIRE[key])
        if value is None:
            continue
        out[key] = value
    return out


def _freeze_plugin_info(record: Any) -> None:
    # read-only copy; left out of the hash since mapping views are unhashable
    object.__setattr__(record, "plugin_info", MappingProxyType(dict(record.plugin_info or {})))


@dataclass(frozen=True)
class EncodedTrack:
    track: str
    info: TrackInfo


@dataclass(frozen=True)
class PlaylistInfo:
    name: str
    selected_track: int = 0


@dataclass(frozen=True)
class Playlist:
    info: PlaylistInfo
    tracks: Tuple[EncodedTrack, ...] = ()
    plugin_info: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _freeze_plugin_info(self)

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def selected_track(self) -> int:
        return self.info.selected_track


@dataclass(frozen=True)
class Requester:
    id: str
    username: str
    discriminator: Optional[str] = None


@dataclass(frozen=True)
class GuildContext:
    guild_id: str
    channel_id: str


@dataclass(frozen=True)
class AnnotatedTrack:
    """A track plus who asked for it and where. `track` is the bare record's token."""
    track: str
    info: TrackInfo
    requester: Optional[Requester] = None
    guild: Optional[GuildContext] = None


@dataclass(frozen=True)
class AnnotatedPlaylist:
    info: PlaylistInfo
    tracks: Tuple[AnnotatedTrack, ...] = ()
    plugin_info: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _freeze_plugin_info(self)


@dataclass(frozen=True)
class LoadException:
    message: str
    severity: str = "COMMON"


@dataclass(frozen=True)
class SearchResult:
    load_type: str
    tracks: Tuple[EncodedTrack, ...] = ()
    playlist_info: Optional[PlaylistInfo] = None
    exception: Optional[LoadException] = None


@dataclass(frozen=True)
class BatchResult:
    index: int
    value: Any = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DecodedValidation:
    valid: bool
    errors: List[str]
    track: Optional[TrackInfo] = None


@dataclass(frozen=True)
class TrackStats:
    total_tracks: int
    total_duration: int
    sources: Dict[str, int]


@dataclass(frozen=True)
class CollectionSummary:
    total_tracks: int
    total_duration: int
    sources: Dict[str, int]
    authors: Dict[str, int]
    average_duration: float
    longest_track: Any = None
    shortest_track: Any = None


# Search load types
TRACK_LOADED = "TRACK_LOADED"
PLAYLIST_LOADED = "PLAYLIST_LOADED"
SEARCH_RESULT = "SEARCH_RESULT"
NO_MATCHES = "NO_MATCHES"
LOAD_FAILED = "LOAD_FAILED"

# Load failure severities
COMMON = "COMMON"
SUSPICIOUS = "SUSPICIOUS"
FAULT = "FAULT"

# Known source names
SOURCE_YOUTUBE = "youtube"
SOURCE_SPOTIFY = "spotify"
SOURCE_SOUNDCLOUD = "soundcloud"
SOURCE_TWITCH = "twitch"
SOURCE_BANDCAMP = "bandcamp"
SOURCE_UNKNOWN = "unknown"
