"""
Grid Model
==========
Square Slitherlink board: the puzzle definition, the eligibility mask and the
current solution edges.

Edges live in two boolean grids:
- horizontal[r][c]: segment from dot (r, c) to dot (r, c+1), shape (N+1, N)
- vertical[r][c]:   segment from dot (r, c) to dot (r+1, c), shape (N, N+1)

Cell (r, c) is bounded by horizontal[r][c] (top), vertical[r][c] (left),
horizontal[r+1][c] (bottom) and vertical[r][c+1] (right).

The mask is computed once at load:
1. Zero pass: every edge around a 0 cell is ineligible.
2. Dead-end pass: a dot with exactly one eligible edge cannot sit on a closed
   loop, so that edge is ineligible too. Sweeps repeat until a full sweep
   removes nothing.

The mask is advisory. Toggles only consult it when ``enforce_mask`` is set.
"""

from __future__ import annotations

import copy
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from slitherlink.model_errors import InvalidPuzzleDefinitionError, resolve_enforce_mask
from slitherlink.results import Dot

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"

BLANK = -1
MIN_REQUIRED = -1
MAX_REQUIRED = 4

# (orientation, edge_row, edge_col, neighbour_dot)
IncidentEdge = Tuple[str, int, int, Dot]


def incident_edges(size: int, r: int, c: int) -> List[IncidentEdge]:
    """
    Edge slots touching dot (r, c), in right, left, bottom, top order.
    Slots that fall off the board are left out.
    """
    edges = []
    if c < size:
        edges.append((HORIZONTAL, r, c, (r, c + 1)))
    if c > 0:
        edges.append((HORIZONTAL, r, c - 1, (r, c - 1)))
    if r < size:
        edges.append((VERTICAL, r, c, (r + 1, c)))
    if r > 0:
        edges.append((VERTICAL, r - 1, c, (r - 1, c)))
    return edges


def validate_definition(definition: Sequence[Sequence[int]]) -> np.ndarray:
    """Check a parsed N x N definition and return it as a read-only array."""
    rows = list(definition)
    size = len(rows)
    if size == 0:
        raise InvalidPuzzleDefinitionError("Puzzle definition is empty")

    for r, row in enumerate(rows):
        row = list(row)
        if len(row) != size:
            raise InvalidPuzzleDefinitionError(
                f"Row {r} has {len(row)} values, expected {size}", row=r
            )
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidPuzzleDefinitionError(
                    f"Cell ({r}, {c}) is not an integer: {value!r}",
                    row=r, col=c, value=value,
                )
            if not MIN_REQUIRED <= value <= MAX_REQUIRED:
                raise InvalidPuzzleDefinitionError(
                    f"Cell ({r}, {c}) requires {value} edges, "
                    f"expected {MIN_REQUIRED}..{MAX_REQUIRED}",
                    row=r, col=c, value=value,
                )

    grid = np.array([list(row) for row in rows], dtype=np.int8)
    grid.flags.writeable = False
    return grid


def build_eligibility_mask(definition: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Run the zero pass then the dead-end pass; returns (horizontal, vertical)."""
    size = definition.shape[0]
    horizontal = np.ones((size + 1, size), dtype=bool)
    vertical = np.ones((size, size + 1), dtype=bool)

    _eliminate_around_zeros(definition, horizontal, vertical)
    after_zero = int(horizontal.sum() + vertical.sum())
    sweeps = _eliminate_dead_ends(horizontal, vertical)

    logger.debug(
        "Eligibility mask %dx%d: %d edges after zero pass, %d after %d dead-end sweeps",
        size, size, after_zero, int(horizontal.sum() + vertical.sum()), sweeps,
    )

    horizontal.flags.writeable = False
    vertical.flags.writeable = False
    return horizontal, vertical


def _eliminate_around_zeros(definition, horizontal, vertical):
    size = definition.shape[0]
    for r in range(size):
        for c in range(size):
            if definition[r, c] == 0:
                horizontal[r, c] = False
                vertical[r, c] = False
                horizontal[r + 1, c] = False
                vertical[r, c + 1] = False


def _eliminate_dead_ends(horizontal, vertical):
    """
    Sweep every dot until a whole sweep finds no dot of degree exactly one.
    Returns the number of sweeps, including the final clean one.
    """
    size = vertical.shape[0]
    grids = {HORIZONTAL: horizontal, VERTICAL: vertical}
    sweeps = 0
    changed = True
    while changed:
        changed = False
        sweeps += 1
        for r in range(size + 1):
            for c in range(size + 1):
                live = [
                    (orientation, er, ec)
                    for orientation, er, ec, _ in incident_edges(size, r, c)
                    if grids[orientation][er, ec]
                ]
                if len(live) == 1:
                    orientation, er, ec = live[0]
                    grids[orientation][er, ec] = False
                    changed = True
    return sweeps


def _read_only(grid: np.ndarray) -> np.ndarray:
    view = grid.view()
    view.flags.writeable = False
    return view


class GridModel:
    """
    One play session on a square board.

    The definition and the mask never change after construction. The solution
    edges start all off and change through the toggles and ``clear()``.
    """

    def __init__(self, definition: Sequence[Sequence[int]], enforce_mask: Optional[bool] = None):
        self._definition = validate_definition(definition)
        self._size = self._definition.shape[0]
        self._mask_horizontal, self._mask_vertical = build_eligibility_mask(self._definition)
        self._enforce_mask = resolve_enforce_mask(enforce_mask)

        self._horizontal = np.zeros((self._size + 1, self._size), dtype=bool)
        self._vertical = np.zeros((self._size, self._size + 1), dtype=bool)

    # ── Read access ────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._size

    @property
    def enforce_mask(self) -> bool:
        return self._enforce_mask

    @property
    def definition(self) -> np.ndarray:
        """Required edge count per cell, -1 for blank cells."""
        return _read_only(self._definition)

    @property
    def horizontal(self) -> np.ndarray:
        return _read_only(self._horizontal)

    @property
    def vertical(self) -> np.ndarray:
        return _read_only(self._vertical)

    @property
    def mask_horizontal(self) -> np.ndarray:
        return _read_only(self._mask_horizontal)

    @property
    def mask_vertical(self) -> np.ndarray:
        return _read_only(self._mask_vertical)

    def required(self, r: int, c: int) -> Optional[int]:
        """Required count of cell (r, c); None off the board."""
        if 0 <= r < self._size and 0 <= c < self._size:
            return int(self._definition[r, c])
        return None

    def is_eligible_horizontal(self, r: int, c: int) -> bool:
        if self._in_horizontal_range(r, c):
            return bool(self._mask_horizontal[r, c])
        return False

    def is_eligible_vertical(self, r: int, c: int) -> bool:
        if self._in_vertical_range(r, c):
            return bool(self._mask_vertical[r, c])
        return False

    def eligible_degree(self, r: int, c: int) -> Optional[int]:
        """Number of mask-eligible edges at dot (r, c); None off the board."""
        if not (0 <= r <= self._size and 0 <= c <= self._size):
            return None
        masks = {HORIZONTAL: self._mask_horizontal, VERTICAL: self._mask_vertical}
        return sum(
            1 for orientation, er, ec, _ in incident_edges(self._size, r, c)
            if masks[orientation][er, ec]
        )

    # ── Mutation ───────────────────────────────────────────────

    def toggle_horizontal(self, r: int, c: int) -> bool:
        """
        Flip the segment to the right of dot (r, c).
        Out-of-range indices are ignored. Returns True when the edge flipped.
        """
        if not self._in_horizontal_range(r, c):
            return False
        return self._flip(self._horizontal, self._mask_horizontal, HORIZONTAL, r, c)

    def toggle_vertical(self, r: int, c: int) -> bool:
        """
        Flip the segment below dot (r, c).
        Out-of-range indices are ignored. Returns True when the edge flipped.
        """
        if not self._in_vertical_range(r, c):
            return False
        return self._flip(self._vertical, self._mask_vertical, VERTICAL, r, c)

    def clear(self):
        """Turn every solution edge off."""
        self._horizontal = np.zeros((self._size + 1, self._size), dtype=bool)
        self._vertical = np.zeros((self._size, self._size + 1), dtype=bool)
        logger.debug("Cleared solution on %dx%d board", self._size, self._size)

    def copy(self) -> "GridModel":
        """Independent solution state over the same definition and mask."""
        clone = copy.copy(self)
        clone._horizontal = self._horizontal.copy()
        clone._vertical = self._vertical.copy()
        return clone

    # ── Internal ───────────────────────────────────────────────

    def _in_horizontal_range(self, r: int, c: int) -> bool:
        return 0 <= r <= self._size and 0 <= c < self._size

    def _in_vertical_range(self, r: int, c: int) -> bool:
        return 0 <= r < self._size and 0 <= c <= self._size

    def _flip(self, grid: np.ndarray, mask: np.ndarray, orientation: str, r: int, c: int) -> bool:
        if self._enforce_mask and not grid[r, c] and not mask[r, c]:
            logger.debug("Refused %s edge (%d, %d): not eligible", orientation, r, c)
            return False
        grid[r, c] = not grid[r, c]
        return True

    def __repr__(self) -> str:
        drawn = int(self._horizontal.sum() + self._vertical.sum())
        return f"GridModel(size={self._size}, drawn={drawn}, enforce_mask={self._enforce_mask})"
