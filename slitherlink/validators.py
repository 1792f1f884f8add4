"""
Board Validators
================
Checks the presentation layer runs before and after a move.
The model itself accepts any in-range toggle; these helpers are where the
eligibility mask gets consulted.
"""

from slitherlink.analyzer import SolutionAnalyzer
from slitherlink.grid_model import HORIZONTAL, VERTICAL
from slitherlink.results import PuzzleStatus


def is_valid_toggle(model, orientation, r, c):
    """
    Check if toggling the edge at (r, c) is a sensible move.
    Returns: (bool, reason)
    """
    if orientation == HORIZONTAL:
        in_range = 0 <= r <= model.size and 0 <= c < model.size
        grid = model.horizontal
        eligible = model.is_eligible_horizontal(r, c)
    elif orientation == VERTICAL:
        in_range = 0 <= r < model.size and 0 <= c <= model.size
        grid = model.vertical
        eligible = model.is_eligible_vertical(r, c)
    else:
        return False, f"Unknown orientation: {orientation}"

    if not in_range:
        return False, "Edge outside the board"

    # Taking a line away is always allowed
    if grid[r, c]:
        return True, "OK"

    if not eligible:
        return False, "Edge can never be part of the loop"

    return True, "OK"


def check_win_condition(model):
    """
    Check if the puzzle is solved.
    Conditions:
    1. All numbered cells have their required count.
    2. The drawn edges form one closed loop.
    """
    status = SolutionAnalyzer(model).status()
    if status is PuzzleStatus.FINISHED:
        return True, status.value
    return False, status.value
