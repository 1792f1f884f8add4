"""
Analysis Results
================
Closed result types shared by the grid model and the solution analyzer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

Dot = Tuple[int, int]
Cell = Tuple[int, int]


class PuzzleStatus(Enum):
    """Overall classification of the drawn edges. Values are display labels."""
    WRONG_COUNT = "Wrong number"
    NO_PATH = "No path"
    DANGLING_END = "Dangling end"
    BRANCHING_LINE = "Branching line"
    DISCONNECTED_LINES = "Disconnected lines"
    FINISHED = "Finished"


class CellFeedback(Enum):
    """How a single cell compares against its required count."""
    BLANK = "blank"
    HIDDEN = "hidden"
    REVEALED = "revealed"
    SATISFIED = "satisfied"
    OVERLOADED = "overloaded"
    IN_PROGRESS = "in_progress"


class EdgeCensus(NamedTuple):
    total: int   # number of drawn edges on the board
    anchor: Dot  # a dot touching one of them, (0, 0) when nothing is drawn


@dataclass(frozen=True)
class LoopTrace:
    """
    Outcome of walking the drawn edges from a start dot.

    Exactly one of the two is meaningful: ``failure`` is None when the walk
    came back to its start, and ``steps`` then counts the edges walked.
    """
    steps: int = 0
    failure: Optional[PuzzleStatus] = None

    @property
    def is_closed(self) -> bool:
        return self.failure is None
