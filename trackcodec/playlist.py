from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .config import EncoderOptions
from .encoder import TrackEncoder, soundcloud_uri, spotify_uri, youtube_uri
from .errors import ValidationError
from .types import (
    SOURCE_SOUNDCLOUD,
    SOURCE_SPOTIFY,
    SOURCE_YOUTUBE,
    EncodedTrack,
    Playlist,
    PlaylistInfo,
    TrackInfo,
)
from .utils import chunked

logger = logging.getLogger("trackcodec.playlist")


def check_playlist_info(info: PlaylistInfo) -> None:
    if not info.name:
        raise ValidationError("Playlist name is required", field="name")
    sel = info.selected_track
    if isinstance(sel, bool) or not isinstance(sel, int) or sel < 0:
        raise ValidationError("Selected track must be a non-negative integer", field="selected_track")


def check_tracks(tracks: Sequence[EncodedTrack]) -> None:
    if not tracks:
        raise ValidationError("Playlist must contain at least one track", field="tracks")


def track_info_from_item(item: Mapping[str, Any], id_key: str, source: str, ms_factor: int = 1) -> TrackInfo:
    ident = item[id_key]
    duration = item["duration"]
    if source == SOURCE_YOUTUBE:
        uri = youtube_uri(ident)
    elif source == SOURCE_SPOTIFY:
        uri = spotify_uri(ident)
    else:
        uri = soundcloud_uri(item["author"], item["title"])
    return TrackInfo(
        identifier=ident,
        title=item["title"],
        author=item["author"],
        length=duration * ms_factor,
        uri=uri,
        is_seekable=duration > 0,
        is_stream=duration == 0,
        position=0,
        source_name=source,
    )


class PlaylistEncoder:
    """Builds, merges and splits playlists of encoded tracks."""

    def __init__(self, options: EncoderOptions | None = None):
        self._options = options or EncoderOptions()
        self.track_encoder = TrackEncoder(self._options)

    @property
    def options(self) -> EncoderOptions:
        return self._options

    def update_options(self, **changes: Any) -> EncoderOptions:
        self._options = dataclasses.replace(self._options, **changes)
        self.track_encoder = TrackEncoder(self._options)
        return self._options

    def encode_playlist(self, info: PlaylistInfo, tracks: Iterable[EncodedTrack]) -> Playlist:
        if tracks is None:
            raise TypeError("tracks must be an iterable of EncodedTrack, got None")
        tracks = list(tracks)
        if self._options.validate:
            check_playlist_info(info)
            check_tracks(tracks)

        max_tracks = self._options.max_tracks
        if max_tracks > 0 and len(tracks) > max_tracks:
            logger.warning(
                "Playlist %r contains %d tracks, but max_tracks is %d; extra tracks dropped",
                info.name,
                len(tracks),
                max_tracks,
            )
            tracks = tracks[:max_tracks]

        encoded: List[EncodedTrack] = []
        for t in tracks:
            if isinstance(t.track, str) and t.track:
                # already encoded
                encoded.append(t)
            else:
                encoded.append(self.track_encoder.encode_track(t.info))

        selected = max(min(info.selected_track, len(encoded) - 1), 0)
        return Playlist(
            info=PlaylistInfo(name=info.name, selected_track=selected),
            tracks=tuple(encoded),
            plugin_info={},
        )

    def create_playlist(self, name: str, infos: Iterable[TrackInfo], selected_track: int = 0) -> Playlist:
        tracks = [EncodedTrack(track="", info=i) for i in infos]
        return self.encode_playlist(PlaylistInfo(name=name, selected_track=selected_track), tracks)

    def create_youtube_playlist(
        self,
        playlist_id: str,
        name: str,
        videos: Iterable[Mapping[str, Any]],
        selected_track: int = 0,
    ) -> Playlist:
        """`videos` items carry videoId, title, author and duration in seconds."""
        infos = [track_info_from_item(v, "videoId", SOURCE_YOUTUBE, ms_factor=1000) for v in videos]
        logger.debug("Building YouTube playlist %s with %d tracks", playlist_id, len(infos))
        return self.create_playlist(name, infos, selected_track)

    def create_spotify_playlist(
        self,
        playlist_id: str,
        name: str,
        items: Iterable[Mapping[str, Any]],
        selected_track: int = 0,
    ) -> Playlist:
        infos = [track_info_from_item(t, "trackId", SOURCE_SPOTIFY) for t in items]
        logger.debug("Building Spotify playlist %s with %d tracks", playlist_id, len(infos))
        return self.create_playlist(name, infos, selected_track)

    def create_soundcloud_playlist(
        self,
        playlist_id: str,
        name: str,
        items: Iterable[Mapping[str, Any]],
        selected_track: int = 0,
    ) -> Playlist:
        infos = [track_info_from_item(t, "trackId", SOURCE_SOUNDCLOUD) for t in items]
        logger.debug("Building SoundCloud playlist %s with %d tracks", playlist_id, len(infos))
        return self.create_playlist(name, infos, selected_track)

    def merge_playlists(self, playlists: Sequence[Playlist], name: Optional[str] = None) -> Playlist:
        if playlists is None:
            raise TypeError("playlists must be a sequence of Playlist, got None")
        playlists = list(playlists)
        all_tracks: List[EncodedTrack] = []
        for pl in playlists:
            all_tracks.extend(pl.tracks)
        selected = playlists[0].selected_track if playlists else 0
        merged_name = name or f"Merged Playlist ({len(playlists)} playlists)"
        return self.encode_playlist(PlaylistInfo(name=merged_name, selected_track=selected), all_tracks)

    def split_playlist(self, playlist: Playlist, chunk_size: int) -> List[Playlist]:
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
            raise TypeError(f"chunk_size must be an int, got {type(chunk_size).__name__}")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")

        chunks: List[Playlist] = []
        for part, chunk in enumerate(chunked(playlist.tracks, chunk_size), start=1):
            selected = playlist.selected_track if part == 1 else 0
            chunk_info = PlaylistInfo(name=f"{playlist.name} (Part {part})", selected_track=selected)
            chunks.append(self.encode_playlist(chunk_info, chunk))
        return chunks


def playlist_to_dict(playlist: Playlist) -> Dict[str, Any]:
    """JSON-ready view of a playlist, using the wire key names."""
    return {
        "info": {"name": playlist.info.name, "selectedTrack": playlist.info.selected_track},
        "pluginInfo": dict(playlist.plugin_info),
        "tracks": [{"track": t.track, "info": t.info.to_dict()} for t in playlist.tracks],
    }
