from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional


class EditKind(IntEnum):
    """Kinds of edits tallied along an alignment path."""

    INSERT = 0
    DELETE = 1
    REPLACE = 2
    MATCH = 3


class EditCounts(NamedTuple):
    """
    Number of edits of each kind used along an alignment path.

    Indexable by :class:`EditKind`, e.g. ``counts[EditKind.REPLACE]``.
    """

    insert: int = 0
    delete: int = 0
    replace: int = 0
    match: int = 0

    def get(self, kind: EditKind) -> int:
        return self[kind]

    @property
    def total_edits(self) -> int:
        """Insertions, deletions and replacements; matches are not edits."""
        return self.insert + self.delete + self.replace

    def bump(self, kind: EditKind) -> "EditCounts":
        counts = list(self)
        counts[kind] += 1
        return EditCounts(*counts)


@dataclass(frozen=True)
class EditOperation:
    """
    A single step of an alignment path.

    :param op_type: The kind of edit.
    :param source_token: Character taken from the first string. `None` for insertions.
    :param target_token: Character taken from the second string. `None` for deletions.
    :param cost: Cost of this step (0.0 for matches).
    """

    op_type: EditKind
    source_token: Optional[str]
    target_token: Optional[str]
    cost: float
