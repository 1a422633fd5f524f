from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from .batch import failures
from .codec import TrackCodec
from .config import EncoderOptions
from .errors import TrackCodecError
from .log_utils import setup_logging
from .playlist import playlist_to_dict
from .types import TrackInfo
from .utils import brief_id, format_duration

console = Console()
err_console = Console(stderr=True)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="trackcodec",
        description="Encode and decode track/playlist metadata tokens",
    )
    p.add_argument("--no-artwork", action="store_true", help="Leave artworkUrl out of encoded tokens")
    p.add_argument("--no-isrc", action="store_true", help="Leave isrc out of encoded tokens")
    p.add_argument("--source-name", default=None, help="Default sourceName for records without one")
    p.add_argument("--no-validate", action="store_true", help="Skip precondition checks before encoding")
    p.add_argument("--max-tracks", type=int, default=None, help="Playlist track cap (0 = unlimited)")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--log-file", default=None, help="Also write logs to this file")

    sub = p.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Encode track JSON (object or list) into tokens")
    enc.add_argument("file", nargs="?", default=None, help="JSON file (default: stdin)")

    dec = sub.add_parser("decode", help="Decode tokens")
    dec.add_argument("tokens", nargs="*", help="Tokens to decode")
    dec.add_argument("--file", default=None, help="File with one token per line")
    dec.add_argument("--json", action="store_true", help="Print decoded records as JSON")

    pl = sub.add_parser("playlist", help="Build a playlist from a JSON list of tracks")
    pl.add_argument("file", help="JSON file holding a list of track objects")
    pl.add_argument("--name", required=True)
    pl.add_argument("--selected", type=int, default=0)
    pl.add_argument("--chunk-size", type=int, default=None, help="Split the playlist into parts of this size")
    return p.parse_args(argv)


def build_options(args: argparse.Namespace) -> EncoderOptions:
    changes: dict = {}
    if args.no_artwork:
        changes["include_artwork"] = False
    if args.no_isrc:
        changes["include_isrc"] = False
    if args.source_name:
        changes["source_name"] = args.source_name
    if args.no_validate:
        changes["validate"] = False
    if args.max_tracks is not None:
        changes["max_tracks"] = args.max_tracks
    return dataclasses.replace(EncoderOptions.from_env(), **changes)


def _read_json(path: Optional[str]) -> Any:
    if path:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    return json.loads(sys.stdin.read())


def cmd_encode(codec: TrackCodec, args: argparse.Namespace) -> int:
    data = _read_json(args.file)
    if isinstance(data, dict):
        print(codec.encode_track(TrackInfo.from_dict(data)).track)
        return 0
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise ValueError("expected a JSON object or a list of objects")
    results = codec.encode_many([TrackInfo.from_dict(d) for d in data])
    for r in results:
        if r.success:
            print(r.value.track)
    for r in failures(results):
        err_console.print(f"[red]#{r.index}: {escape(r.error)}[/red]")
    return 1 if failures(results) else 0


def _text(value: Any) -> str:
    return "" if value is None else escape(str(value))


def _duration(t) -> str:
    # decoded fields are unchecked and may hold any JSON type
    if t.is_stream is True:
        return "LIVE"
    if isinstance(t.length, int) and not isinstance(t.length, bool) and t.length >= 0:
        return format_duration(t.length)
    return "?"


def _render_table(results) -> Table:
    table = Table(title="Decoded tracks")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Duration")
    table.add_column("Source")
    table.add_column("Identifier")
    for r in results:
        if not r.success:
            table.add_row(str(r.index), f"[red]{escape(r.error)}[/red]", "", "", "", "")
            continue
        t = r.value
        table.add_row(
            str(r.index),
            _text(t.title),
            _text(t.author),
            _duration(t),
            _text(t.source_name),
            escape(brief_id(str(t.identifier or ""), prefix=6, suffix=4)),
        )
    return table


def cmd_decode(codec: TrackCodec, args: argparse.Namespace) -> int:
    tokens: List[str] = list(args.tokens)
    if args.file:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        tokens.extend(line.strip() for line in lines if line.strip())
    if not tokens:
        err_console.print("[yellow]No tokens given.[/yellow]")
        return 2

    results = codec.decode_many(tqdm(tokens, desc="Decoding", disable=len(tokens) < 100))
    if args.json:
        out = [
            {"index": r.index, "info": r.value.to_dict()} if r.success else {"index": r.index, "error": r.error}
            for r in results
        ]
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        console.print(_render_table(results))
    bad = failures(results)
    if bad:
        err_console.print(f"[red]{len(bad)} of {len(results)} tokens failed to decode[/red]")
        return 1
    return 0


def cmd_playlist(codec: TrackCodec, args: argparse.Namespace) -> int:
    data = _read_json(args.file)
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise ValueError("expected a JSON list of track objects")
    playlist = codec.create_playlist(args.name, [TrackInfo.from_dict(d) for d in data], args.selected)
    if args.chunk_size is not None:
        parts = codec.split_playlist(playlist, args.chunk_size)
        print(json.dumps([playlist_to_dict(p) for p in parts], ensure_ascii=False, indent=2))
    else:
        print(json.dumps(playlist_to_dict(playlist), ensure_ascii=False, indent=2))
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "playlist": cmd_playlist,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger, _ = setup_logging(args.verbose, args.log_file)
    try:
        codec = TrackCodec(build_options(args))
        logger.debug("Options: %s", codec.options)
        return COMMANDS[args.command](codec, args)
    except (TrackCodecError, ValueError, OSError) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        return 2


if __name__ == "__main__":
    sys.exit(main())
