from __future__ import annotations

from typing import Any, Callable, Iterable, List

from .types import BatchResult, TrackInfo


def _apply(items: Iterable[Any], fn: Callable[[Any], Any]) -> List[BatchResult]:
    if items is None:
        raise TypeError("expected an iterable, got None")
    results: List[BatchResult] = []
    for index, item in enumerate(items):
        try:
            results.append(BatchResult(index=index, value=fn(item)))
        except Exception as e:
            # one bad item must not abort the batch
            results.append(BatchResult(index=index, error=str(e) or type(e).__name__))
    return results


def encode_many(infos: Iterable[TrackInfo], encoder) -> List[BatchResult]:
    """Encode each record; `value` is the EncodedTrack on success."""
    return _apply(infos, encoder.encode_track)


def decode_many(tokens: Iterable[str], decoder: Callable[[str], Any]) -> List[BatchResult]:
    """Decode each token with `decoder`; failures keep their input index."""
    return _apply(tokens, decoder)


def successes(results: Iterable[BatchResult]) -> List[Any]:
    return [r.value for r in results if r.success]


def failures(results: Iterable[BatchResult]) -> List[BatchResult]:
    return [r for r in results if not r.success]
