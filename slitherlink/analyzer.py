"""
Solution Analyzer
=================
Read-only queries over a GridModel that decide what the drawn edges mean.

Nothing is cached: every call looks at the model as it is right now, so the
caller simply re-queries after each toggle.

Finished check:
1. Every numbered cell has exactly its required count of drawn edges.
2. Walking the drawn edges from any drawn dot, never stepping straight back,
   returns to the start with every visited dot of degree two.
3. That walk used every drawn edge on the board.
"""

import logging
from typing import List, Optional, Set

import numpy as np

from slitherlink.grid_model import BLANK, HORIZONTAL, GridModel, incident_edges
from slitherlink.results import Cell, CellFeedback, Dot, EdgeCensus, LoopTrace, PuzzleStatus

logger = logging.getLogger(__name__)


class SolutionAnalyzer:
    """
    Classifies the current solution of a GridModel.

    Usage:
        analyzer = SolutionAnalyzer(model)
        model.toggle_horizontal(0, 0)
        if analyzer.status() is PuzzleStatus.FINISHED:
            ...
    """

    # Blank-looking cells show their number once a drawn edge is this close.
    HINT_REVEAL_DISTANCE = 2

    def __init__(self, model: GridModel):
        self.model = model

    # ── Cell queries ───────────────────────────────────────────

    def edges_around_cell(self, r: int, c: int) -> Optional[int]:
        """Drawn edges around cell (r, c), or None when the cell is off the board."""
        size = self.model.size
        if not (0 <= r < size and 0 <= c < size):
            return None
        horizontal = self.model.horizontal
        vertical = self.model.vertical
        return (
            int(horizontal[r, c])
            + int(vertical[r, c])
            + int(horizontal[r + 1, c])
            + int(vertical[r, c + 1])
        )

    def nearest_edge_distance(self, r: int, c: int) -> Optional[int]:
        """
        Manhattan distance from the centre of cell (r, c) to the midpoint of
        the closest drawn edge, truncated to an int. None when nothing is drawn.
        """
        centre_row = r + 0.5
        centre_col = c + 0.5

        h_rows, h_cols = np.nonzero(self.model.horizontal)
        v_rows, v_cols = np.nonzero(self.model.vertical)
        distances = np.concatenate((
            np.abs(h_cols + 0.5 - centre_col) + np.abs(h_rows - centre_row),
            np.abs(v_cols - centre_col) + np.abs(v_rows + 0.5 - centre_row),
        ))
        if distances.size == 0:
            return None
        return int(distances.min())

    def violating_cells(self) -> Set[Cell]:
        """Numbered cells whose drawn count differs from the required count."""
        definition = self.model.definition
        counts = self._edge_counts()
        wrong = (definition != BLANK) & (counts != definition)
        return {(int(r), int(c)) for r, c in np.argwhere(wrong)}

    def cell_feedback(self, r: int, c: int) -> Optional[CellFeedback]:
        required = self.model.required(r, c)
        if required is None:
            return None
        if required == BLANK:
            return CellFeedback.BLANK

        drawn = self.edges_around_cell(r, c)
        if drawn == 0:
            distance = self.nearest_edge_distance(r, c)
            if distance is not None and distance <= self.HINT_REVEAL_DISTANCE:
                return CellFeedback.REVEALED
            return CellFeedback.HIDDEN
        if drawn == required:
            return CellFeedback.SATISFIED
        if drawn > required:
            return CellFeedback.OVERLOADED
        return CellFeedback.IN_PROGRESS

    # ── Dot queries ────────────────────────────────────────────

    def incident_dots(self, r: int, c: int) -> Optional[List[Dot]]:
        """
        Dots joined to dot (r, c) by a drawn edge, checked right, left,
        bottom, top. None when (r, c) is not a dot of this board.
        """
        size = self.model.size
        if not (0 <= r <= size and 0 <= c <= size):
            return None
        horizontal = self.model.horizontal
        vertical = self.model.vertical
        connected = []
        for orientation, er, ec, neighbour in incident_edges(size, r, c):
            grid = horizontal if orientation == HORIZONTAL else vertical
            if grid[er, ec]:
                connected.append(neighbour)
        return connected

    def edge_census(self) -> EdgeCensus:
        """Count the drawn edges and pick a dot on one of them to start a trace."""
        horizontal = self.model.horizontal
        vertical = self.model.vertical
        total = int(np.count_nonzero(horizontal) + np.count_nonzero(vertical))

        anchor = (0, 0)
        for grid in (horizontal, vertical):
            drawn = np.argwhere(grid)
            if len(drawn):
                anchor = (int(drawn[0][0]), int(drawn[0][1]))
                break
        return EdgeCensus(total, anchor)

    def trace_loop(self, start_row: int, start_col: int) -> LoopTrace:
        """
        Follow drawn edges from the start dot until the walk gets back to it.

        Each visited dot must have exactly two drawn edges; the walk stops
        with NO_PATH, DANGLING_END or BRANCHING_LINE at the first dot that
        doesn't. A start dot off the board counts as NO_PATH.
        """
        start = (start_row, start_col)
        previous = None
        current = start
        steps = 0

        while steps == 0 or current != start:
            connections = self.incident_dots(*current)
            if not connections:
                return LoopTrace(steps, PuzzleStatus.NO_PATH)
            if len(connections) == 1:
                return LoopTrace(steps, PuzzleStatus.DANGLING_END)
            if len(connections) > 2:
                return LoopTrace(steps, PuzzleStatus.BRANCHING_LINE)

            steps += 1
            following = connections[1] if connections[0] == previous else connections[0]
            previous, current = current, following

        return LoopTrace(steps)

    # ── Whole board ────────────────────────────────────────────

    def status(self) -> PuzzleStatus:
        if self.violating_cells():
            result = PuzzleStatus.WRONG_COUNT
        else:
            census = self.edge_census()
            trace = self.trace_loop(*census.anchor)
            if not trace.is_closed:
                result = trace.failure
            elif trace.steps != census.total:
                result = PuzzleStatus.DISCONNECTED_LINES
            else:
                result = PuzzleStatus.FINISHED

        logger.debug("Board status: %s", result.value)
        return result

    # ── Helpers ────────────────────────────────────────────────

    def _edge_counts(self) -> np.ndarray:
        """N x N array of drawn edges around every cell."""
        horizontal = self.model.horizontal.astype(np.int8)
        vertical = self.model.vertical.astype(np.int8)
        return horizontal[:-1, :] + horizontal[1:, :] + vertical[:, :-1] + vertical[:, 1:]
