from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config import EncoderOptions
from .encoder import TrackEncoder, soundcloud_uri, spotify_uri, youtube_uri
from .playlist import PlaylistEncoder, track_info_from_item
from .types import (
    SOURCE_SOUNDCLOUD,
    SOURCE_SPOTIFY,
    SOURCE_YOUTUBE,
    AnnotatedPlaylist,
    AnnotatedTrack,
    EncodedTrack,
    GuildContext,
    PlaylistInfo,
    Requester,
    TrackInfo,
    TrackStats,
)


def annotate(
    encoded: EncodedTrack,
    requester: Optional[Requester] = None,
    guild: Optional[GuildContext] = None,
) -> AnnotatedTrack:
    """Attach requester/guild context without touching the token."""
    return AnnotatedTrack(track=encoded.track, info=encoded.info, requester=requester, guild=guild)


def _stream_flags(info_fields: Dict[str, Any], duration: int) -> Dict[str, Any]:
    info_fields.setdefault("is_seekable", duration > 0)
    info_fields.setdefault("is_stream", duration == 0)
    info_fields.setdefault("position", 0)
    return info_fields


class AnnotatingEncoder:
    """Encoder for multi-tenant consumers that tag tracks with who queued them and where."""

    def __init__(self, options: EncoderOptions | None = None):
        self._options = options or EncoderOptions()
        self.track_encoder = TrackEncoder(self._options)
        self.playlist_encoder = PlaylistEncoder(self._options)

    @property
    def options(self) -> EncoderOptions:
        return self._options

    def update_options(self, **changes: Any) -> EncoderOptions:
        self._options = dataclasses.replace(self._options, **changes)
        self.track_encoder = TrackEncoder(self._options)
        self.playlist_encoder = PlaylistEncoder(self._options)
        return self._options

    def encode_annotated_track(
        self, info: TrackInfo, requester: Requester, guild_id: str, channel_id: str
    ) -> AnnotatedTrack:
        encoded = self.track_encoder.encode_track(info)
        return annotate(encoded, requester, GuildContext(guild_id=guild_id, channel_id=channel_id))

    def encode_annotated_playlist(
        self,
        info: PlaylistInfo,
        tracks: Iterable[EncodedTrack],
        requester: Requester,
        guild_id: str,
        channel_id: str,
    ) -> AnnotatedPlaylist:
        guild = GuildContext(guild_id=guild_id, channel_id=channel_id)
        playlist = self.playlist_encoder.encode_playlist(info, tracks)
        return AnnotatedPlaylist(
            info=playlist.info,
            tracks=tuple(annotate(t, requester, guild) for t in playlist.tracks),
            plugin_info=playlist.plugin_info,
        )

    def create_annotated_youtube_track(
        self,
        video_id: str,
        title: str,
        author: str,
        duration: int,
        requester: Requester,
        guild_id: str,
        channel_id: str,
        **overrides: Any,
    ) -> AnnotatedTrack:
        """`duration` is in seconds."""
        fields = dict(
            identifier=video_id,
            title=title,
            author=author,
            length=duration * 1000,
            uri=youtube_uri(video_id),
            source_name=SOURCE_YOUTUBE,
        )
        fields.update(overrides)
        info = TrackInfo(**_stream_flags(fields, duration))
        return self.encode_annotated_track(info, requester, guild_id, channel_id)

    def create_annotated_spotify_track(
        self,
        track_id: str,
        title: str,
        author: str,
        duration: int,
        requester: Requester,
        guild_id: str,
        channel_id: str,
        **overrides: Any,
    ) -> AnnotatedTrack:
        fields = dict(
            identifier=track_id,
            title=title,
            author=author,
            length=duration,
            uri=spotify_uri(track_id),
            source_name=SOURCE_SPOTIFY,
        )
        fields.update(overrides)
        info = TrackInfo(**_stream_flags(fields, duration))
        return self.encode_annotated_track(info, requester, guild_id, channel_id)

    def create_annotated_soundcloud_track(
        self,
        track_id: str,
        title: str,
        author: str,
        duration: int,
        requester: Requester,
        guild_id: str,
        channel_id: str,
        **overrides: Any,
    ) -> AnnotatedTrack:
        fields = dict(
            identifier=track_id,
            title=title,
            author=author,
            length=duration,
            uri=soundcloud_uri(author, title),
            source_name=SOURCE_SOUNDCLOUD,
        )
        fields.update(overrides)
        info = TrackInfo(**_stream_flags(fields, duration))
        return self.encode_annotated_track(info, requester, guild_id, channel_id)

    def create_annotated_youtube_playlist(
        self,
        playlist_id: str,
        name: str,
        videos: Iterable[Mapping[str, Any]],
        requester: Requester,
        guild_id: str,
        channel_id: str,
        selected_track: int = 0,
    ) -> AnnotatedPlaylist:
        """`videos` items carry videoId, title, author and duration in seconds."""
        tracks = [
            EncodedTrack(track="", info=track_info_from_item(v, "videoId", SOURCE_YOUTUBE, ms_factor=1000))
            for v in videos
        ]
        return self.encode_annotated_playlist(
            PlaylistInfo(name=name, selected_track=selected_track), tracks, requester, guild_id, channel_id
        )

    def create_annotated_spotify_playlist(
        self,
        playlist_id: str,
        name: str,
        items: Iterable[Mapping[str, Any]],
        requester: Requester,
        guild_id: str,
        channel_id: str,
        selected_track: int = 0,
    ) -> AnnotatedPlaylist:
        tracks = [EncodedTrack(track="", info=track_info_from_item(t, "trackId", SOURCE_SPOTIFY)) for t in items]
        return self.encode_annotated_playlist(
            PlaylistInfo(name=name, selected_track=selected_track), tracks, requester, guild_id, channel_id
        )


def get_requester(track: AnnotatedTrack) -> Optional[Requester]:
    return track.requester


def get_guild_info(track: AnnotatedTrack) -> Optional[GuildContext]:
    guild = track.guild
    if guild is None or not guild.guild_id or not guild.channel_id:
        return None
    return guild


def filter_tracks_by_requester(tracks: Iterable[AnnotatedTrack], requester_id: str) -> List[AnnotatedTrack]:
    return [t for t in tracks if t.requester is not None and t.requester.id == requester_id]


def filter_tracks_by_guild(tracks: Iterable[AnnotatedTrack], guild_id: str) -> List[AnnotatedTrack]:
    return [t for t in tracks if t.guild is not None and t.guild.guild_id == guild_id]


def get_track_stats(tracks: Iterable[AnnotatedTrack], requester_id: str) -> TrackStats:
    mine = filter_tracks_by_requester(tracks, requester_id)
    sources: Dict[str, int] = {}
    total = 0
    for t in mine:
        total += t.info.length
        sources[t.info.source_name] = sources.get(t.info.source_name, 0) + 1
    return TrackStats(total_tracks=len(mine), total_duration=total, sources=sources)
