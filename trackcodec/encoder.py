from __future__ import annotations

import base64
import binascii
import dataclasses
import json
from typing import Any, Dict

from .config import EncoderOptions
from .errors import MalformedTokenError, ValidationError
from .types import (
    SOURCE_SOUNDCLOUD,
    SOURCE_SPOTIFY,
    SOURCE_YOUTUBE,
    DecodedTrack,
    EncodedTrack,
    TrackInfo,
)


def youtube_uri(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def spotify_uri(track_id: str) -> str:
    return f"https://open.spotify.com/track/{track_id}"


def soundcloud_uri(author: str, title: str) -> str:
    return f"https://soundcloud.com/{author}/{title}"


def check_track_info(info: TrackInfo) -> None:
    """Raise ValidationError for the first missing/invalid field.

    Order: identifier, title, author, length, uri. The URI is only checked for
    presence here; see validation.validate_track_info for the URL syntax check.
    """
    if not info.identifier:
        raise ValidationError("Track identifier is required", field="identifier")
    if not info.title:
        raise ValidationError("Track title is required", field="title")
    if not info.author:
        raise ValidationError("Track author is required", field="author")
    length = info.length
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise ValidationError("Track length must be a non-negative integer", field="length")
    if not info.uri:
        raise ValidationError("Track URI is required", field="uri")


def encode_payload(data: Dict[str, Any]) -> str:
    raw = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_payload(token: str) -> Dict[str, Any]:
    if not isinstance(token, str):
        raise MalformedTokenError(f"Failed to decode track: expected str, got {type(token).__name__}")
    try:
        raw = base64.b64decode(token, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueError;
        # deeply nested JSON exhausts the parser stack
        raise MalformedTokenError(f"Failed to decode track: {e}") from e
    if not isinstance(data, dict):
        raise MalformedTokenError(
            f"Failed to decode track: payload is a {type(data).__name__}, not an object"
        )
    return data


class TrackEncoder:
    """Turns TrackInfo records into tokens and back."""

    def __init__(self, options: EncoderOptions | None = None):
        self._options = options or EncoderOptions()

    @property
    def options(self) -> EncoderOptions:
        return self._options

    def update_options(self, **changes: Any) -> EncoderOptions:
        self._options = dataclasses.replace(self._options, **changes)
        return self._options

    def project(self, info: TrackInfo) -> Dict[str, Any]:
        """The fields of `info` that go into its token, under the current options."""
        opts = self._options
        data: Dict[str, Any] = {
            "identifier": info.identifier,
            "isSeekable": info.is_seekable,
            "author": info.author,
            "length": info.length,
            "isStream": info.is_stream,
            "position": info.position,
            "title": info.title,
            "uri": info.uri,
            "sourceName": info.source_name or opts.source_name,
        }
        if opts.include_artwork and info.artwork_url:
            data["artworkUrl"] = info.artwork_url
        if opts.include_isrc and info.isrc:
            data["isrc"] = info.isrc
        return data

    def encode_track(self, info: TrackInfo) -> EncodedTrack:
        if self._options.validate:
            check_track_info(info)
        token = encode_payload(self.project(info))
        return EncodedTrack(track=token, info=info)

    def decode_track(self, token: str) -> DecodedTrack:
        return DecodedTrack.from_payload(decode_payload(token))

    def create_track(
        self,
        identifier: str,
        title: str,
        author: str,
        length: int,
        uri: str,
        **overrides: Any,
    ) -> EncodedTrack:
        fields: Dict[str, Any] = {
            "identifier": identifier,
            "title": title,
            "author": author,
            "length": length,
            "uri": uri,
            "is_seekable": length > 0,
            "is_stream": length == 0,
            "position": 0,
            "source_name": self._options.source_name,
        }
        fields.update(overrides)
        return self.encode_track(TrackInfo(**fields))

    def create_youtube_track(
        self, video_id: str, title: str, author: str, duration: int, **overrides: Any
    ) -> EncodedTrack:
        """`duration` is in seconds."""
        overrides.setdefault("source_name", SOURCE_YOUTUBE)
        return self.create_track(
            video_id, title, author, duration * 1000, youtube_uri(video_id), **overrides
        )

    def create_spotify_track(
        self, track_id: str, title: str, author: str, duration: int, **overrides: Any
    ) -> EncodedTrack:
        overrides.setdefault("source_name", SOURCE_SPOTIFY)
        return self.create_track(track_id, title, author, duration, spotify_uri(track_id), **overrides)

    def create_soundcloud_track(
        self, track_id: str, title: str, author: str, duration: int, **overrides: Any
    ) -> EncodedTrack:
        overrides.setdefault("source_name", SOURCE_SOUNDCLOUD)
        return self.create_track(
            track_id, title, author, duration, soundcloud_uri(author, title), **overrides
        )
