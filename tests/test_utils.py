import pytest

from trackcodec.encoder import TrackEncoder
from trackcodec.playlist import PlaylistEncoder
from trackcodec.types import DecodedTrack, TrackInfo
from trackcodec.utils import (
    brief_id,
    create_playlist_summary,
    create_track_summary,
    detect_track_source,
    extract_soundcloud_track_id,
    extract_spotify_track_id,
    extract_track_metadata,
    extract_youtube_video_id,
    format_duration,
    format_duration_from_seconds,
    is_valid_url,
    milliseconds_to_seconds,
    sanitize_author_name,
    sanitize_track_title,
    seconds_to_milliseconds,
)


@pytest.mark.parametrize(
    "ms,expected",
    [(0, "0:00"), (59999, "0:59"), (212000, "3:32"), (3600000, "1:00:00"), (3725000, "1:02:05")],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_duration_conversions():
    assert format_duration_from_seconds(252) == "4:12"
    assert seconds_to_milliseconds(252) == 252000
    assert milliseconds_to_seconds(212999) == 212


def test_is_valid_url():
    assert is_valid_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    assert not is_valid_url("")
    assert not is_valid_url("just words")
    assert not is_valid_url(None)


def test_extract_ids():
    assert extract_youtube_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10") == "dQw4w9WgXcQ"
    assert extract_youtube_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"
    assert extract_youtube_video_id("https://www.youtube.com/embed/abc123") == "abc123"
    assert extract_youtube_video_id("https://example.com") is None
    assert extract_spotify_track_id("https://open.spotify.com/track/4iV5W9uYEdYUVa79Axb7Rh?si=x") == "4iV5W9uYEdYUVa79Axb7Rh"
    assert extract_spotify_track_id("https://open.spotify.com/album/x") is None
    assert extract_soundcloud_track_id("https://soundcloud.com/rick-astley/never-gonna?in=x") == "rick-astley/never-gonna"


@pytest.mark.parametrize(
    "uri,source",
    [
        ("https://youtu.be/x", "youtube"),
        ("https://open.spotify.com/track/x", "spotify"),
        ("https://soundcloud.com/a/b", "soundcloud"),
        ("https://www.twitch.tv/somebody", "twitch"),
        ("https://artist.bandcamp.com/track/x", "bandcamp"),
        ("https://example.com/x.mp3", "unknown"),
    ],
)
def test_detect_track_source(uri, source):
    assert detect_track_source(uri) == source


def test_sanitize():
    assert sanitize_track_title("short") == "short"
    long_title = "x" * 150
    assert sanitize_track_title(long_title) == "x" * 97 + "..."
    assert len(sanitize_author_name("y" * 60)) == 50


def test_brief_id():
    assert brief_id("abc") == "abc"
    assert brief_id("dQw4w9WgXcQ") == "dQw...cQ"


def test_summaries():
    t = TrackEncoder().create_youtube_track("dQw4w9WgXcQ", "Never Gonna Give You Up", "Rick Astley", 212)
    assert create_track_summary(t) == "Never Gonna Give You Up by Rick Astley (3:32)"

    pl = PlaylistEncoder().create_playlist("Rick", [t.info, t.info])
    assert create_playlist_summary(pl) == "Rick - 2 tracks (7:04)"


def test_extract_track_metadata_fills_gaps():
    meta = extract_track_metadata(DecodedTrack(identifier="x"))
    assert meta["basic"] == {"title": "Unknown Title", "author": "Unknown Artist", "duration": "0:00", "source": "unknown"}
    assert meta["technical"]["identifier"] == "x"
    assert meta["technical"]["is_seekable"] is False
    assert meta["optional"] == {"artwork_url": None, "isrc": None}


def test_extract_track_metadata_full():
    info = TrackInfo(
        identifier="id",
        title="T",
        author="A",
        length=61000,
        uri="https://e.com",
        is_seekable=True,
        is_stream=False,
        position=30,
        source_name="http",
        isrc="X",
    )
    meta = extract_track_metadata(info)
    assert meta["basic"]["duration"] == "1:01"
    assert meta["technical"]["position"] == 30
    assert meta["optional"]["isrc"] == "X"
