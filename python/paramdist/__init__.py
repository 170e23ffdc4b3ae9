from .edit_operation import EditCounts, EditKind, EditOperation
from .levenshtein import (
    DEFAULT_WEIGHTS,
    DistanceMeasurer,
    EditCountWeights,
    Normalized,
    WeightedDistance,
    Weights,
    WeightsByRune,
    by_rune,
    count_edit,
    lsd,
    normalized,
)
from .matching import ScanResult, distance_all, nearest

__all__ = [
    "DEFAULT_WEIGHTS",
    "DistanceMeasurer",
    "EditCountWeights",
    "EditCounts",
    "EditKind",
    "EditOperation",
    "Normalized",
    "ScanResult",
    "WeightedDistance",
    "Weights",
    "WeightsByRune",
    "by_rune",
    "count_edit",
    "distance_all",
    "lsd",
    "nearest",
    "normalized",
]
