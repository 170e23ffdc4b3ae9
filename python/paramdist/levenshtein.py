import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional, Protocol, Union, runtime_checkable

from .edit_operation import EditCounts, EditKind, EditOperation

_NO_EDITS = EditCounts()


@runtime_checkable
class DistanceMeasurer(Protocol):
    """Anything that measures the distance between two strings."""

    def distance(self, a: str, b: str) -> float: ...


DistanceFunction = Callable[[str, str], float]
Measurer = Union[DistanceMeasurer, DistanceFunction]


def as_distance_function(dm: Measurer) -> DistanceFunction:
    """Accept either a :class:`DistanceMeasurer` or a plain ``(str, str) -> float`` callable."""
    distance = getattr(dm, "distance", None)
    if callable(distance):
        return distance
    if callable(dm):
        return dm
    raise TypeError(f"Expected a DistanceMeasurer or a callable, got {type(dm).__name__}")


def _check_costs(**costs: float) -> None:
    for name, cost in costs.items():
        if math.isnan(cost) or cost < 0:
            raise ValueError(f"{name} cost must be non-negative, got {cost!r}.")


class _Step(NamedTuple):
    cost: float
    kind: EditKind
    counts: EditCounts = _NO_EDITS


def _cheapest(replace: _Step, insert: _Step, delete: _Step) -> _Step:
    # Fixed priority on equal cost: replace/match, then insert, then delete.
    # The order is a convention, but edit counts depend on it.
    best = replace
    if insert.cost < best.cost:
        best = insert
    if delete.cost < best.cost:
        best = delete
    return best


def _accumulate(model: "WeightedDistance", a: str, b: str, detail: bool) -> tuple[float, EditCounts]:
    """
    Rolling-row dynamic program over the cost matrix of `a` (rows) against `b` (columns).

    Only two rows are kept, laid out along the shorter string. When the layout is
    transposed, stepping along a row consumes a character of `a` (a deletion) and
    stepping across rows consumes a character of `b` (an insertion).
    """
    transposed = len(a) < len(b)
    outer, inner = (b, a) if transposed else (a, b)
    if transposed:
        along, across = EditKind.DELETE, EditKind.INSERT
        along_cost, across_cost = model.delete_cost, model.insert_cost
    else:
        along, across = EditKind.INSERT, EditKind.DELETE
        along_cost, across_cost = model.insert_cost, model.delete_cost

    costs = [0.0]
    for ch in inner:
        costs.append(costs[-1] + along_cost(ch))
    if detail:
        counts = [_NO_EDITS]
        for _ in inner:
            counts.append(counts[-1].bump(along))
    else:
        counts = [_NO_EDITS] * len(costs)

    for oc in outer:
        step = across_cost(oc)
        row_costs = [costs[0] + step]
        row_counts = [counts[0].bump(across)] if detail else counts
        for j, ic in enumerate(inner, 1):
            src, dst = (ic, oc) if transposed else (oc, ic)
            if src == dst:
                diagonal = _Step(costs[j - 1], EditKind.MATCH, counts[j - 1])
            else:
                diagonal = _Step(
                    costs[j - 1] + model.replace_cost(src, dst),
                    EditKind.REPLACE,
                    counts[j - 1],
                )
            in_row = _Step(row_costs[j - 1] + along_cost(ic), along, row_counts[j - 1])
            from_above = _Step(costs[j] + step, across, counts[j])
            if transposed:
                cost, kind, previous = _cheapest(diagonal, from_above, in_row)
            else:
                cost, kind, previous = _cheapest(diagonal, in_row, from_above)
            row_costs.append(cost)
            if detail:
                row_counts.append(previous.bump(kind))
        costs, counts = row_costs, row_counts

    return costs[-1], counts[-1]


class WeightedDistance(ABC):
    """
    Weighted Levenshtein distance driven by per-character cost lookups.

    Subclasses decide what an insertion, deletion or replacement costs. Keeping
    a character (a match) is always free.
    """

    @abstractmethod
    def insert_cost(self, char: str) -> float: ...

    @abstractmethod
    def delete_cost(self, char: str) -> float: ...

    @abstractmethod
    def replace_cost(self, src: str, dst: str) -> float: ...

    def distance(self, a: str, b: str) -> float:
        """Minimum total cost of transforming `a` into `b`."""
        cost, _ = _accumulate(self, a, b, detail=False)
        return cost

    def distance_with_detail(self, a: str, b: str) -> tuple[float, EditCounts]:
        """
        Like :meth:`distance`, but also returns how many edits of each kind the
        cheapest path uses.

        When several paths share the minimum cost, the one preferring
        replacement (or match) over insertion, and insertion over deletion, at
        every cell is reported.
        """
        return _accumulate(self, a, b, detail=True)

    def explain(self, a: str, b: str, filter_matches: bool = True) -> list[EditOperation]:
        """
        Edit script of the path reported by :meth:`distance_with_detail`.

        Unlike the distance computation this keeps the full cost matrix in memory.

        :param a: Source string.
        :param b: Target string.
        :param filter_matches: Leave out steps that keep a character unchanged.
        :return: List of :class:`EditOperation` in string order.
        """
        n, m = len(a), len(b)
        cost = [[0.0] * (m + 1) for _ in range(n + 1)]
        moves: list[list[Optional[EditKind]]] = [[None] * (m + 1) for _ in range(n + 1)]
        for j in range(1, m + 1):
            cost[0][j] = cost[0][j - 1] + self.insert_cost(b[j - 1])
            moves[0][j] = EditKind.INSERT
        for i in range(1, n + 1):
            cost[i][0] = cost[i - 1][0] + self.delete_cost(a[i - 1])
            moves[i][0] = EditKind.DELETE
            for j in range(1, m + 1):
                if a[i - 1] == b[j - 1]:
                    diagonal = _Step(cost[i - 1][j - 1], EditKind.MATCH)
                else:
                    diagonal = _Step(
                        cost[i - 1][j - 1] + self.replace_cost(a[i - 1], b[j - 1]),
                        EditKind.REPLACE,
                    )
                insert = _Step(cost[i][j - 1] + self.insert_cost(b[j - 1]), EditKind.INSERT)
                delete = _Step(cost[i - 1][j] + self.delete_cost(a[i - 1]), EditKind.DELETE)
                cost[i][j], moves[i][j], _ = _cheapest(diagonal, insert, delete)

        path: list[EditOperation] = []
        i, j = n, m
        while i or j:
            kind = moves[i][j]
            if kind is EditKind.INSERT:
                path.append(EditOperation(kind, None, b[j - 1], self.insert_cost(b[j - 1])))
                j -= 1
            elif kind is EditKind.DELETE:
                path.append(EditOperation(kind, a[i - 1], None, self.delete_cost(a[i - 1])))
                i -= 1
            else:
                if kind is EditKind.REPLACE:
                    step = self.replace_cost(a[i - 1], b[j - 1])
                else:
                    step = 0.0
                path.append(EditOperation(kind, a[i - 1], b[j - 1], step))
                i -= 1
                j -= 1
        path.reverse()
        if filter_matches:
            return [op for op in path if op.op_type is not EditKind.MATCH]
        return path


@dataclass(frozen=True)
class Weights(WeightedDistance):
    """
    Uniform cost parameters for weighted Levenshtein distance.

    :param insert: Cost of inserting any character of the second string.
    :param delete: Cost of deleting any character of the first string.
    :param replace: Cost of replacing one character with a different one.
    """

    insert: float = 1.0
    delete: float = 1.0
    replace: float = 1.0

    def __post_init__(self) -> None:
        _check_costs(Insertion=self.insert, Deletion=self.delete, Replacement=self.replace)

    def insert_cost(self, char: str) -> float:
        return self.insert

    def delete_cost(self, char: str) -> float:
        return self.delete

    def replace_cost(self, src: str, dst: str) -> float:
        return self.replace


DEFAULT_WEIGHTS = Weights(1.0, 1.0, 1.0)


@dataclass
class WeightsByRune(WeightedDistance):
    """
    Weighted Levenshtein distance with per-character cost overrides.

    Characters without an override fall back to the uniform `weights`. Build the
    overrides with the chaining methods, then treat the instance as read-only::

        wr = by_rune(Weights(1, 1, 1)).insert("a", 0.1).delete("b", 0.01).replace("c", "d", 0.001)
        wr.distance("bc", "ad")  # 0.111
    """

    weights: Weights = DEFAULT_WEIGHTS
    insertion_costs: dict[str, float] = field(default_factory=dict)
    deletion_costs: dict[str, float] = field(default_factory=dict)
    substitution_costs: dict[tuple[str, str], float] = field(default_factory=dict)

    def insert(self, rune_group: str, cost: float) -> "WeightsByRune":
        """Set the cost of inserting each character of `rune_group`."""
        _check_costs(Insertion=cost)
        for rune in rune_group:
            self.insertion_costs[rune] = cost
        return self

    def delete(self, rune_group: str, cost: float) -> "WeightsByRune":
        """Set the cost of deleting each character of `rune_group`."""
        _check_costs(Deletion=cost)
        for rune in rune_group:
            self.deletion_costs[rune] = cost
        return self

    def replace(self, src_group: str, dst_group: str, cost: float) -> "WeightsByRune":
        """
        Set the cost of replacing any character of `src_group` with any character
        of `dst_group`. Pairs of identical characters are skipped since keeping a
        character is always free.
        """
        _check_costs(Replacement=cost)
        for src in src_group:
            for dst in dst_group:
                if src != dst:
                    self.substitution_costs[(src, dst)] = cost
        return self

    def insert_cost(self, char: str) -> float:
        return self.insertion_costs.get(char, self.weights.insert)

    def delete_cost(self, char: str) -> float:
        return self.deletion_costs.get(char, self.weights.delete)

    def replace_cost(self, src: str, dst: str) -> float:
        return self.substitution_costs.get((src, dst), self.weights.replace)


def by_rune(weights: Weights = DEFAULT_WEIGHTS) -> WeightsByRune:
    """Start building per-character overrides on top of `weights`."""
    return WeightsByRune(weights=weights)


@dataclass(frozen=True)
class Normalized:
    """
    Divides the wrapped distance by the length of the longer string.

    Two empty strings have no length to divide by; their raw distance is returned.
    """

    wrapped: Measurer

    def distance(self, a: str, b: str) -> float:
        raw = as_distance_function(self.wrapped)(a, b)
        longest = max(len(a), len(b))
        if longest == 0:
            return raw
        return raw / longest


def normalized(dm: Measurer) -> Normalized:
    return Normalized(dm)


def lsd(a: str, b: str) -> int:
    """Standard Levenshtein distance."""
    return int(DEFAULT_WEIGHTS.distance(a, b))


def count_edit(a: str, b: str) -> tuple[int, EditCounts]:
    """Standard Levenshtein distance together with the edit counts of its path."""
    cost, counts = DEFAULT_WEIGHTS.distance_with_detail(a, b)
    return int(cost), counts


@dataclass(frozen=True)
class EditCountWeights:
    """
    Weights applied after the fact to the edit counts of the unit-cost path.

    The path itself is always chosen by standard Levenshtein distance, so this
    rates *which* edits were needed rather than searching for the cheapest ones.
    Compare :class:`Weights`, which runs the dynamic program with its costs.
    """

    insert: float = 1.0
    delete: float = 1.0
    replace: float = 1.0

    def __post_init__(self) -> None:
        _check_costs(Insertion=self.insert, Deletion=self.delete, Replacement=self.replace)

    def distance(self, a: str, b: str) -> float:
        _, counts = count_edit(a, b)
        return (
            counts.insert * self.insert
            + counts.delete * self.delete
            + counts.replace * self.replace
        )
