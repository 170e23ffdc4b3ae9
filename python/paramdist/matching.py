import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import NamedTuple, Optional

from .levenshtein import Measurer, as_distance_function

logger = logging.getLogger(__name__)


class ScanResult(NamedTuple):
    candidate: str
    distance: float


def _fan_out(
    dm: Measurer, orig: str, candidates: Sequence[str], max_workers: Optional[int]
) -> tuple[ThreadPoolExecutor, dict[Future, int]]:
    distance = as_distance_function(dm)
    workers = max_workers if max_workers is not None else len(candidates)
    executor = ThreadPoolExecutor(max_workers=workers)
    futures = {
        executor.submit(distance, orig, candidate): index
        for index, candidate in enumerate(candidates)
    }
    logger.debug("Started %d distance tasks for %r", len(futures), orig)
    return executor, futures


def nearest(
    dm: Measurer,
    orig: str,
    candidates: Sequence[str],
    /,
    *,
    max_workers: Optional[int] = None,
) -> ScanResult:
    """
    Finds the candidate closest to `orig`.

    One task per candidate runs concurrently; the calling thread collects the
    results as they complete. All tasks run to completion.

    :param dm: A :class:`~paramdist.levenshtein.DistanceMeasurer` or a
               ``(str, str) -> float`` callable.
    :param orig: The string to look up.
    :param candidates: Strings to compare against. Duplicates are allowed.
    :param max_workers: Upper bound on worker threads, which must be positive.
                        Defaults to one thread per candidate.
    :return: The nearest candidate and its distance. Among candidates with equal
             distance the one listed first wins, regardless of completion order.
             An empty `candidates` yields ``ScanResult("", 0.0)``.
    """
    if not candidates:
        return ScanResult("", 0.0)

    executor, futures = _fan_out(dm, orig, candidates, max_workers)
    best_index = -1
    best_distance = 0.0
    with executor:
        for future in as_completed(futures):
            index = futures[future]
            distance = future.result()
            if (
                best_index < 0
                or distance < best_distance
                or (distance == best_distance and index < best_index)
            ):
                best_index, best_distance = index, distance

    logger.debug("Nearest to %r is %r (%s)", orig, candidates[best_index], best_distance)
    return ScanResult(candidates[best_index], best_distance)


def distance_all(
    dm: Measurer,
    orig: str,
    candidates: Sequence[str],
    /,
    *,
    max_workers: Optional[int] = None,
) -> list[float]:
    """
    Distances from `orig` to every candidate, computed concurrently.

    :return: A list aligned index for index with `candidates`.
    """
    if not candidates:
        return []

    distances = [0.0] * len(candidates)
    executor, futures = _fan_out(dm, orig, candidates, max_workers)
    with executor:
        for future in as_completed(futures):
            distances[futures[future]] = future.result()
    return distances
