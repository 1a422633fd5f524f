from __future__ import annotations

from typing import List, Optional

from .errors import ValidationError
from .types import DecodedTrack, DecodedValidation, TrackInfo
from .utils import is_valid_url


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_track_info(info: TrackInfo) -> List[str]:
    """Collect every problem with `info`, unlike the encoder which stops at the first."""
    errors: List[str] = []
    if not info.identifier:
        errors.append("Track identifier is required")
    if not info.title:
        errors.append("Track title is required")
    if not info.author:
        errors.append("Track author is required")
    if not _is_int(info.length) or info.length < 0:
        errors.append("Track length must be a non-negative integer")
    if not info.uri:
        errors.append("Track URI is required")
    if not is_valid_url(info.uri):
        errors.append("Track URI must be a valid URL")
    return errors


def _decoded_errors(track: Optional[DecodedTrack]) -> List[str]:
    if track is None:
        return ["Track is null or undefined"]
    errors: List[str] = []
    if not track.identifier:
        errors.append("Missing identifier")
    if not track.title:
        errors.append("Missing title")
    if not track.author:
        errors.append("Missing author")
    if not _is_int(track.length) or track.length < 0:
        errors.append("Invalid length (must be non-negative integer)")
    if not track.uri:
        errors.append("Missing URI")
    if not track.source_name:
        errors.append("Missing source name")
    if not isinstance(track.is_seekable, bool):
        errors.append("isSeekable must be boolean")
    if not isinstance(track.is_stream, bool):
        errors.append("isStream must be boolean")
    if not _is_int(track.position) or track.position < 0:
        errors.append("Invalid position (must be non-negative integer)")
    return errors


def _to_info(track: DecodedTrack) -> TrackInfo:
    return TrackInfo(
        identifier=track.identifier,
        title=track.title,
        author=track.author,
        length=track.length,
        uri=track.uri,
        is_seekable=track.is_seekable,
        is_stream=track.is_stream,
        position=track.position,
        source_name=track.source_name,
        artwork_url=track.artwork_url,
        isrc=track.isrc,
    )


def validate_decoded_track(track: Optional[DecodedTrack]) -> DecodedValidation:
    errors = _decoded_errors(track)
    if errors:
        return DecodedValidation(valid=False, errors=errors)
    return DecodedValidation(valid=True, errors=[], track=_to_info(track))


def promote(track: Optional[DecodedTrack]) -> TrackInfo:
    """Turn a decoded record into a TrackInfo, or raise ValidationError listing every problem."""
    result = validate_decoded_track(track)
    if not result.valid:
        raise ValidationError("; ".join(result.errors), errors=result.errors)
    return result.track
