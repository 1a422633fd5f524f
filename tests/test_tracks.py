from trackcodec.encoder import TrackEncoder
from trackcodec.search import (
    create_load_failed_result,
    create_no_matches_result,
    create_playlist_search_result,
    create_search_result,
    create_track_search_result,
)
from trackcodec.playlist import PlaylistEncoder
from trackcodec.tracks import (
    calculate_playlist_duration,
    calculate_total_duration,
    compare_tracks,
    create_track_collection_summary,
    dedupe_tracks,
    filter_tracks_by_author,
    filter_tracks_by_duration,
    filter_tracks_by_source,
    find_tracks_by_criteria,
    get_unique_authors,
    get_unique_sources,
    group_tracks_by_author,
    group_tracks_by_source,
    search_tracks_by_title,
    sort_tracks_by_author,
    sort_tracks_by_duration,
    sort_tracks_by_title,
)
from trackcodec.types import FAULT, LOAD_FAILED, NO_MATCHES, PLAYLIST_LOADED, SEARCH_RESULT, TRACK_LOADED, TrackInfo


def make(ident, title, author, length, source):
    return TrackEncoder().encode_track(
        TrackInfo(
            identifier=ident,
            title=title,
            author=author,
            length=length,
            uri=f"https://example.com/{ident}",
            is_seekable=length > 0,
            is_stream=length == 0,
            source_name=source,
        )
    )


def library():
    return [
        make("1", "Bohemian Rhapsody", "Queen", 354000, "youtube"),
        make("2", "another one bites the dust", "Queen", 215000, "spotify"),
        make("3", "Radio", "Live Station", 0, "twitch"),
        make("4", "Crazy Train", "Ozzy Osbourne", 294000, "youtube"),
    ]


def ids(tracks):
    return [t.info.identifier for t in tracks]


def test_durations():
    tracks = library()
    assert calculate_total_duration(tracks) == 354000 + 215000 + 294000
    pl = PlaylistEncoder().create_playlist("x", [t.info for t in tracks])
    assert calculate_playlist_duration(pl) == calculate_total_duration(tracks)


def test_sorting():
    tracks = library()
    assert ids(sort_tracks_by_duration(tracks)) == ["3", "2", "4", "1"]
    assert ids(sort_tracks_by_duration(tracks, ascending=False)) == ["1", "4", "2", "3"]
    assert ids(sort_tracks_by_title(tracks)) == ["2", "1", "4", "3"]
    assert ids(sort_tracks_by_author(tracks)) == ["3", "4", "1", "2"]
    # input untouched
    assert ids(tracks) == ["1", "2", "3", "4"]


def test_filters():
    tracks = library()
    assert ids(filter_tracks_by_source(tracks, "youtube")) == ["1", "4"]
    assert ids(filter_tracks_by_duration(tracks, 215000, 300000)) == ["2", "4"]
    assert ids(filter_tracks_by_author(tracks, "queen")) == ["1", "2"]
    assert ids(search_tracks_by_title(tracks, "TRAIN")) == ["4"]


def test_unique_values_keep_first_seen_order():
    tracks = library()
    assert get_unique_authors(tracks) == ["Queen", "Live Station", "Ozzy Osbourne"]
    assert get_unique_sources(tracks) == ["youtube", "spotify", "twitch"]


def test_dedupe_by_field():
    tracks = library() + [make("1", "dup", "x", 1, "youtube")]
    assert ids(dedupe_tracks(tracks)) == ["1", "2", "3", "4"]
    assert ids(dedupe_tracks(tracks, field="author")) == ["1", "3", "4", "1"]


def test_compare_tracks_works_on_decoded():
    enc = TrackEncoder()
    t = library()[0]
    decoded = enc.decode_track(t.track)
    assert compare_tracks(t, decoded)
    assert not compare_tracks(t, library()[1])


def test_find_by_criteria():
    tracks = library()
    assert ids(find_tracks_by_criteria(tracks, author="queen", min_duration=300000)) == ["1"]
    assert ids(find_tracks_by_criteria(tracks, source="youtube", title="crazy")) == ["4"]
    assert ids(find_tracks_by_criteria(tracks)) == ["1", "2", "3", "4"]


def test_grouping():
    tracks = library()
    by_source = group_tracks_by_source(tracks)
    assert {k: ids(v) for k, v in by_source.items()} == {"youtube": ["1", "4"], "spotify": ["2"], "twitch": ["3"]}
    assert list(group_tracks_by_author(tracks)) == ["Queen", "Live Station", "Ozzy Osbourne"]


def test_collection_summary():
    s = create_track_collection_summary(library())
    assert s.total_tracks == 4
    assert s.total_duration == 863000
    assert s.sources == {"youtube": 2, "spotify": 1, "twitch": 1}
    assert s.authors["Queen"] == 2
    assert s.average_duration == 863000 / 4
    assert s.longest_track.info.identifier == "1"
    # the shortest entry is a live stream
    assert s.shortest_track is None


def test_empty_collection_summary():
    s = create_track_collection_summary([])
    assert s.total_tracks == 0
    assert s.longest_track is None


def test_search_results():
    tracks = library()
    pl = PlaylistEncoder().create_playlist("pl", [t.info for t in tracks])

    assert create_search_result(tracks).load_type == SEARCH_RESULT
    single = create_track_search_result(tracks[0])
    assert single.load_type == TRACK_LOADED and single.tracks == (tracks[0],)

    res = create_playlist_search_result(pl)
    assert res.load_type == PLAYLIST_LOADED
    assert res.playlist_info == pl.info
    assert res.tracks == pl.tracks

    assert create_no_matches_result().load_type == NO_MATCHES
    failed = create_load_failed_result("boom", FAULT)
    assert failed.load_type == LOAD_FAILED
    assert failed.exception.message == "boom"
    assert failed.exception.severity == FAULT
    assert create_load_failed_result("x").exception.severity == "COMMON"
