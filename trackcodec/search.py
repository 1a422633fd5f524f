from __future__ import annotations

from typing import Iterable, Optional

from .types import (
    COMMON,
    LOAD_FAILED,
    NO_MATCHES,
    PLAYLIST_LOADED,
    SEARCH_RESULT,
    TRACK_LOADED,
    EncodedTrack,
    LoadException,
    Playlist,
    PlaylistInfo,
    SearchResult,
)


def create_search_result(
    tracks: Iterable[EncodedTrack],
    load_type: str = SEARCH_RESULT,
    playlist_info: Optional[PlaylistInfo] = None,
) -> SearchResult:
    return SearchResult(load_type=load_type, tracks=tuple(tracks), playlist_info=playlist_info)


def create_track_search_result(track: EncodedTrack) -> SearchResult:
    return create_search_result([track], TRACK_LOADED)


def create_playlist_search_result(playlist: Playlist) -> SearchResult:
    return create_search_result(playlist.tracks, PLAYLIST_LOADED, playlist.info)


def create_no_matches_result() -> SearchResult:
    return create_search_result([], NO_MATCHES)


def create_load_failed_result(message: str, severity: str = COMMON) -> SearchResult:
    return SearchResult(load_type=LOAD_FAILED, exception=LoadException(message=message, severity=severity))
