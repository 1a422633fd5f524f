from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from .types import SOURCE_UNKNOWN, CollectionSummary, Playlist
from .utils import normalize_str

T = TypeVar("T")

# Helpers in this module accept EncodedTrack / AnnotatedTrack (anything with
# `.info`) as well as bare TrackInfo / DecodedTrack records.


def _info(track: Any) -> Any:
    return getattr(track, "info", track)


def _length(track: Any) -> int:
    return _info(track).length or 0


def calculate_total_duration(tracks: Iterable[Any]) -> int:
    return sum(_length(t) for t in tracks)


def calculate_playlist_duration(playlist: Playlist) -> int:
    return calculate_total_duration(playlist.tracks)


def sort_tracks_by_duration(tracks: Iterable[T], ascending: bool = True) -> List[T]:
    return sorted(tracks, key=_length, reverse=not ascending)


def sort_tracks_by_title(tracks: Iterable[T], ascending: bool = True) -> List[T]:
    return sorted(tracks, key=lambda t: normalize_str(_info(t).title), reverse=not ascending)


def sort_tracks_by_author(tracks: Iterable[T], ascending: bool = True) -> List[T]:
    return sorted(tracks, key=lambda t: normalize_str(_info(t).author), reverse=not ascending)


def filter_tracks_by_source(tracks: Iterable[T], source: str) -> List[T]:
    return [t for t in tracks if _info(t).source_name == source]


def filter_tracks_by_duration(tracks: Iterable[T], min_duration: int, max_duration: int) -> List[T]:
    """Inclusive on both ends."""
    return [t for t in tracks if min_duration <= _length(t) <= max_duration]


def filter_tracks_by_author(tracks: Iterable[T], author: str) -> List[T]:
    needle = normalize_str(author)
    return [t for t in tracks if needle in normalize_str(_info(t).author)]


def search_tracks_by_title(tracks: Iterable[T], query: str) -> List[T]:
    needle = normalize_str(query)
    return [t for t in tracks if needle in normalize_str(_info(t).title)]


def get_unique_authors(tracks: Iterable[Any]) -> List[str]:
    return list(dict.fromkeys(_info(t).author for t in tracks))


def get_unique_sources(tracks: Iterable[Any]) -> List[str]:
    return list(dict.fromkeys(_info(t).source_name for t in tracks))


def dedupe_tracks(tracks: Iterable[T], field: str = "identifier") -> List[T]:
    """Keep the first track for each value of `field` (a TrackInfo attribute name)."""
    seen = set()
    out: List[T] = []
    for t in tracks:
        key = getattr(_info(t), field)
        if key in seen:
            continue
        seen.add(key)
        out.append(t)
    return out


_COMPARE_FIELDS = ("identifier", "title", "author", "length", "uri", "source_name")


def compare_tracks(a: Any, b: Any) -> bool:
    """Same track by identity fields; position, flags and optional fields are ignored."""
    ia, ib = _info(a), _info(b)
    return all(getattr(ia, f, None) == getattr(ib, f, None) for f in _COMPARE_FIELDS)


def find_tracks_by_criteria(
    tracks: Iterable[T],
    title: Optional[str] = None,
    author: Optional[str] = None,
    source: Optional[str] = None,
    min_duration: Optional[int] = None,
    max_duration: Optional[int] = None,
) -> List[T]:
    out: List[T] = []
    for t in tracks:
        info = _info(t)
        if title and normalize_str(title) not in normalize_str(info.title):
            continue
        if author and normalize_str(author) not in normalize_str(info.author):
            continue
        if source and info.source_name != source:
            continue
        if min_duration is not None and _length(t) < min_duration:
            continue
        if max_duration is not None and _length(t) > max_duration:
            continue
        out.append(t)
    return out


def group_tracks_by_source(tracks: Iterable[T]) -> Dict[str, List[T]]:
    groups: Dict[str, List[T]] = {}
    for t in tracks:
        groups.setdefault(_info(t).source_name or SOURCE_UNKNOWN, []).append(t)
    return groups


def group_tracks_by_author(tracks: Iterable[T]) -> Dict[str, List[T]]:
    groups: Dict[str, List[T]] = {}
    for t in tracks:
        groups.setdefault(_info(t).author or "Unknown Artist", []).append(t)
    return groups


def create_track_collection_summary(tracks: Sequence[Any]) -> CollectionSummary:
    tracks = list(tracks)
    if not tracks:
        return CollectionSummary(
            total_tracks=0,
            total_duration=0,
            sources={},
            authors={},
            average_duration=0.0,
        )

    total = calculate_total_duration(tracks)
    by_duration = sort_tracks_by_duration(tracks)
    longest, shortest = by_duration[-1], by_duration[0]
    return CollectionSummary(
        total_tracks=len(tracks),
        total_duration=total,
        sources={k: len(v) for k, v in group_tracks_by_source(tracks).items()},
        authors={k: len(v) for k, v in group_tracks_by_author(tracks).items()},
        average_duration=total / len(tracks),
        # zero-length entries are streams, not "shortest"/"longest" tracks
        longest_track=longest if _length(longest) > 0 else None,
        shortest_track=shortest if _length(shortest) > 0 else None,
    )
