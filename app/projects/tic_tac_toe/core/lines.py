"""
Winning lines for an NxN board.

Boards are flat and row-major, so cell (row, col) lives at index row * n + col.
Lines come out in a fixed order (rows, columns, main diagonal, anti-diagonal)
and the detector relies on that order to break ties.
"""
from functools import lru_cache

from app.projects.tic_tac_toe.core.errors import InvalidBoardSizeError

Line = tuple[int, ...]


@lru_cache(maxsize=None)
def generate_lines(n: int) -> tuple[Line, ...]:
    """Return the 2n + 2 winning lines for an n x n board."""
    if not isinstance(n, int) or isinstance(n, bool) or n < 2:
        raise InvalidBoardSizeError(f"Board size must be an integer >= 2, got {n!r}")

    rows = [tuple(range(r * n, r * n + n)) for r in range(n)]
    columns = [tuple(range(c, n * n, n)) for c in range(n)]
    main_diagonal = tuple(i * (n + 1) for i in range(n))
    # i * (n - 1) is row i - 1, column n - i
    anti_diagonal = tuple(i * (n - 1) for i in range(1, n + 1))

    return tuple(rows + columns + [main_diagonal, anti_diagonal])
