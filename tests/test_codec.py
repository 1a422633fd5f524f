import dataclasses

import pytest

from trackcodec.codec import TrackCodec
from trackcodec.config import EncoderOptions
from trackcodec.errors import ValidationError
from trackcodec.types import DecodedTrack, PlaylistInfo, Requester, TrackInfo

ALICE = Requester(id="1", username="alice")


def ti(ident: str, **kw) -> TrackInfo:
    fields = dict(
        identifier=ident,
        title=f"Title {ident}",
        author="Author",
        length=1000,
        uri=f"https://example.com/{ident}",
        is_seekable=True,
        is_stream=False,
        artwork_url="https://img.example.com/a.jpg",
    )
    fields.update(kw)
    return TrackInfo(**fields)


def test_shared_options():
    opts = EncoderOptions(source_name="http")
    codec = TrackCodec(opts)
    assert codec.options is opts
    assert codec.tracks.options is opts
    assert codec.playlists.options is opts
    assert codec.annotated.options is opts


def test_track_round_trip():
    codec = TrackCodec()
    encoded = codec.encode_track(ti("a"))
    decoded = codec.decode_track(encoded.track)
    assert decoded.identifier == "a"
    assert decoded.source_name == "unknown"
    assert decoded.artwork_url == "https://img.example.com/a.jpg"


def test_update_options_reaches_every_encoder():
    codec = TrackCodec()
    new = codec.update_options(include_artwork=False, source_name="youtube", max_tracks=1)
    assert codec.options == new
    assert codec.tracks.options == new
    assert codec.playlists.options == new
    assert codec.annotated.options == new

    assert codec.decode_track(codec.encode_track(ti("a")).track).artwork_url is None
    assert len(codec.create_playlist("p", [ti("a"), ti("b")]).tracks) == 1

    annotated = codec.encode_annotated_track(ti("a"), ALICE, "g", "c")
    assert codec.decode_track(annotated.track).source_name == "youtube"
    assert codec.decode_track(annotated.track).artwork_url is None


def test_update_options_keeps_old_snapshot():
    codec = TrackCodec()
    before = codec.options
    codec.update_options(validate=False)
    assert before.validate is True
    assert codec.options.validate is False


def test_batches():
    codec = TrackCodec()
    good = codec.encode_track(ti("a")).track
    results = codec.decode_many([good, "???"])
    assert [r.success for r in results] == [True, False]

    encoded = codec.encode_many([ti("a"), ti("b", title="")])
    assert encoded[0].success and not encoded[1].success


def test_playlist_helpers():
    codec = TrackCodec()
    a = codec.create_playlist("A", [ti("1"), ti("2")])
    b = codec.create_youtube_playlist("PL1", "B", [{"videoId": "v", "title": "T", "author": "X", "duration": 3}])
    merged = codec.merge_playlists([a, b])
    assert merged.name == "Merged Playlist (2 playlists)"
    assert len(merged.tracks) == 3

    parts = codec.split_playlist(merged, 2)
    assert [len(p.tracks) for p in parts] == [2, 1]

    again = codec.encode_playlist(PlaylistInfo(name="again", selected_track=9), merged.tracks)
    assert again.selected_track == 2


def test_annotation_helpers():
    codec = TrackCodec()
    t = codec.create_annotated_spotify_track("s1", "Song", "Band", 200000, ALICE, "g1", "c1")
    assert codec.get_requester(t) == ALICE
    assert codec.get_guild_info(t).channel_id == "c1"
    assert codec.filter_tracks_by_guild([t], "g2") == []
    assert codec.get_track_stats([t], "1").total_duration == 200000

    bare = codec.annotate(codec.create_youtube_track("v", "T", "A", 1))
    assert codec.get_requester(bare) is None


def test_promote_decoded_track():
    codec = TrackCodec()
    info = ti("a")
    decoded = codec.decode_track(codec.encode_track(info).track)

    assert codec.validate_decoded_track(decoded).valid
    assert codec.promote(decoded) == dataclasses.replace(info, source_name="unknown")
    assert codec.validate_track_info(info) == []


def test_promote_rejects_partial_record():
    codec = TrackCodec()
    assert not codec.validate_decoded_track(DecodedTrack(identifier="x")).valid
    with pytest.raises(ValidationError):
        codec.promote(DecodedTrack(identifier="x"))
