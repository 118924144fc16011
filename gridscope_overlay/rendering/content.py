"""
Info panel content: explicit tagged union of plain lines or table rows.
"""

from dataclasses import dataclass
from typing import Sequence, Union


@dataclass(frozen=True)
class Lines:
    """Flat list of text lines."""

    lines: Sequence[str]

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Tabular:
    """Rows of cells, rendered as aligned columns."""

    rows: Sequence[Sequence[str]]

    def __len__(self) -> int:
        return len(self.rows)


PanelContent = Union[Lines, Tabular]


def content_from_raw(raw: Sequence) -> PanelContent:
    """
    Wrap an untyped list: rows if its first element is a list/tuple, else lines.

    Empty input becomes empty Lines.
    """
    if len(raw) > 0 and isinstance(raw[0], (list, tuple)):
        return Tabular(rows=[list(row) for row in raw])
    return Lines(lines=list(raw))
