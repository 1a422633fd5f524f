from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from . import annotate as _annotate
from .annotate import AnnotatingEncoder
from .batch import decode_many, encode_many
from .config import EncoderOptions
from .encoder import TrackEncoder
from .playlist import PlaylistEncoder
from .types import (
    AnnotatedPlaylist,
    AnnotatedTrack,
    BatchResult,
    DecodedTrack,
    DecodedValidation,
    EncodedTrack,
    GuildContext,
    Playlist,
    PlaylistInfo,
    Requester,
    TrackInfo,
    TrackStats,
)
from .validation import promote, validate_decoded_track, validate_track_info


class TrackCodec:
    """Single entry point over the track, playlist and annotating encoders.

    All three share one options snapshot; update_options swaps it everywhere.
    """

    def __init__(self, options: EncoderOptions | None = None):
        self._options = options or EncoderOptions()
        self.tracks = TrackEncoder(self._options)
        self.playlists = PlaylistEncoder(self._options)
        self.annotated = AnnotatingEncoder(self._options)

    @property
    def options(self) -> EncoderOptions:
        return self._options

    def update_options(self, **changes: Any) -> EncoderOptions:
        self._options = self.tracks.update_options(**changes)
        self.playlists.update_options(**changes)
        self.annotated.update_options(**changes)
        return self._options

    # tracks

    def encode_track(self, info: TrackInfo) -> EncodedTrack:
        return self.tracks.encode_track(info)

    def decode_track(self, token: str) -> DecodedTrack:
        return self.tracks.decode_track(token)

    def create_track(self, identifier: str, title: str, author: str, length: int, uri: str, **overrides: Any) -> EncodedTrack:
        return self.tracks.create_track(identifier, title, author, length, uri, **overrides)

    def create_youtube_track(self, video_id: str, title: str, author: str, duration: int, **overrides: Any) -> EncodedTrack:
        return self.tracks.create_youtube_track(video_id, title, author, duration, **overrides)

    def create_spotify_track(self, track_id: str, title: str, author: str, duration: int, **overrides: Any) -> EncodedTrack:
        return self.tracks.create_spotify_track(track_id, title, author, duration, **overrides)

    def create_soundcloud_track(self, track_id: str, title: str, author: str, duration: int, **overrides: Any) -> EncodedTrack:
        return self.tracks.create_soundcloud_track(track_id, title, author, duration, **overrides)

    def validate_track_info(self, info: TrackInfo) -> List[str]:
        return validate_track_info(info)

    def validate_decoded_track(self, decoded: Optional[DecodedTrack]) -> DecodedValidation:
        return validate_decoded_track(decoded)

    def promote(self, decoded: DecodedTrack) -> TrackInfo:
        """Turn a decoded record back into a TrackInfo, or raise ValidationError."""
        return promote(decoded)

    def encode_many(self, infos: Iterable[TrackInfo]) -> List[BatchResult]:
        return encode_many(infos, self.tracks)

    def decode_many(self, tokens: Iterable[str]) -> List[BatchResult]:
        return decode_many(tokens, self.tracks.decode_track)

    # playlists

    def encode_playlist(self, info: PlaylistInfo, tracks: Iterable[EncodedTrack]) -> Playlist:
        return self.playlists.encode_playlist(info, tracks)

    def create_playlist(self, name: str, infos: Iterable[TrackInfo], selected_track: int = 0) -> Playlist:
        return self.playlists.create_playlist(name, infos, selected_track)

    def create_youtube_playlist(self, playlist_id: str, name: str, videos: Iterable[Mapping[str, Any]], selected_track: int = 0) -> Playlist:
        return self.playlists.create_youtube_playlist(playlist_id, name, videos, selected_track)

    def create_spotify_playlist(self, playlist_id: str, name: str, items: Iterable[Mapping[str, Any]], selected_track: int = 0) -> Playlist:
        return self.playlists.create_spotify_playlist(playlist_id, name, items, selected_track)

    def create_soundcloud_playlist(self, playlist_id: str, name: str, items: Iterable[Mapping[str, Any]], selected_track: int = 0) -> Playlist:
        return self.playlists.create_soundcloud_playlist(playlist_id, name, items, selected_track)

    def merge_playlists(self, playlists: Sequence[Playlist], name: Optional[str] = None) -> Playlist:
        return self.playlists.merge_playlists(playlists, name)

    def split_playlist(self, playlist: Playlist, chunk_size: int) -> List[Playlist]:
        return self.playlists.split_playlist(playlist, chunk_size)

    # annotation

    def annotate(self, encoded: EncodedTrack, requester: Optional[Requester] = None, guild: Optional[GuildContext] = None) -> AnnotatedTrack:
        return _annotate.annotate(encoded, requester, guild)

    def encode_annotated_track(self, info: TrackInfo, requester: Requester, guild_id: str, channel_id: str) -> AnnotatedTrack:
        return self.annotated.encode_annotated_track(info, requester, guild_id, channel_id)

    def encode_annotated_playlist(
        self, info: PlaylistInfo, tracks: Iterable[EncodedTrack], requester: Requester, guild_id: str, channel_id: str
    ) -> AnnotatedPlaylist:
        return self.annotated.encode_annotated_playlist(info, tracks, requester, guild_id, channel_id)

    def create_annotated_youtube_track(self, *args: Any, **kwargs: Any) -> AnnotatedTrack:
        return self.annotated.create_annotated_youtube_track(*args, **kwargs)

    def create_annotated_spotify_track(self, *args: Any, **kwargs: Any) -> AnnotatedTrack:
        return self.annotated.create_annotated_spotify_track(*args, **kwargs)

    def create_annotated_soundcloud_track(self, *args: Any, **kwargs: Any) -> AnnotatedTrack:
        return self.annotated.create_annotated_soundcloud_track(*args, **kwargs)

    def create_annotated_youtube_playlist(self, *args: Any, **kwargs: Any) -> AnnotatedPlaylist:
        return self.annotated.create_annotated_youtube_playlist(*args, **kwargs)

    def create_annotated_spotify_playlist(self, *args: Any, **kwargs: Any) -> AnnotatedPlaylist:
        return self.annotated.create_annotated_spotify_playlist(*args, **kwargs)

    def get_requester(self, track: AnnotatedTrack) -> Optional[Requester]:
        return _annotate.get_requester(track)

    def get_guild_info(self, track: AnnotatedTrack) -> Optional[GuildContext]:
        return _annotate.get_guild_info(track)

    def filter_tracks_by_requester(self, tracks: Iterable[AnnotatedTrack], requester_id: str) -> List[AnnotatedTrack]:
        return _annotate.filter_tracks_by_requester(tracks, requester_id)

    def filter_tracks_by_guild(self, tracks: Iterable[AnnotatedTrack], guild_id: str) -> List[AnnotatedTrack]:
        return _annotate.filter_tracks_by_guild(tracks, guild_id)

    def get_track_stats(self, tracks: Iterable[AnnotatedTrack], requester_id: str) -> TrackStats:
        return _annotate.get_track_stats(tracks, requester_id)
