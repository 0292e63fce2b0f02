"""
Win/draw detection over a flat board.
"""
from dataclasses import dataclass
from typing import Sequence

from app.projects.tic_tac_toe.core.constants import Cell, GameStatus
from app.projects.tic_tac_toe.core.lines import Line

Board = tuple[Cell, ...]


@dataclass(frozen=True)
class Outcome:
    winner: Cell | None
    line: Line = ()

    @property
    def is_draw(self) -> bool:
        return self.winner is None


DRAW = Outcome(winner=None, line=())


def empty_board(size: int) -> Board:
    return (Cell.EMPTY,) * (size * size)


def is_board_full(board: Sequence[Cell]) -> bool:
    return all(cell.is_marker for cell in board)


def detect(board: Sequence[Cell], lines: Sequence[Line]) -> Outcome | None:
    """
    Check the board for a finished game.

    Lines are scanned in the order given and the first complete one wins, so
    when a single move closes two lines only the earlier line is reported.

    Returns:
        Outcome with the winning marker and line, DRAW when the board is full
        with no line, or None while the game can continue.
    """
    for line in lines:
        first = board[line[0]]
        if not first.is_marker:
            continue
        if all(board[index] is first for index in line):
            return Outcome(winner=first, line=tuple(line))

    if is_board_full(board):
        return DRAW
    return None


def status_for(outcome: Outcome | None) -> GameStatus:
    if outcome is None:
        return GameStatus.IN_PROGRESS
    if outcome.is_draw:
        return GameStatus.DRAW
    return GameStatus.won_by(outcome.winner)
