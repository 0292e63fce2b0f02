"""
Game engine for Tic-Tac-Toe.

A GameEngine owns exactly one Session. Moves, undo and reset run to completion
before returning. After a move is committed the engine publishes a
GameStateChanged event to its listeners (the store uses this to persist each
move); whatever a listener does, the committed move stands.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable

from app.projects.tic_tac_toe.core.constants import (
    DEFAULT_BOARD_SIZE,
    FIRST_PLAYER,
    Cell,
    GameStatus,
)
from app.projects.tic_tac_toe.core.lines import Line, generate_lines
from app.projects.tic_tac_toe.core.rules import Board, detect, empty_board, status_for

logger = logging.getLogger(__name__)


def board_to_json(board: Board) -> list[str | None]:
    return [cell.value for cell in board]


@dataclass(frozen=True)
class HistoryEntry:
    board: Board
    current_player: Cell
    status: GameStatus
    winning_line: Line = ()


@dataclass(frozen=True)
class GameStateChanged:
    """Published after every accepted move.

    current_player is the player value before the turn toggled, i.e. the
    marker that was just placed.
    """
    board: Board
    current_player: Cell
    status: GameStatus

    def to_record(self) -> dict:
        return {
            "board": board_to_json(self.board),
            "current_player": self.current_player.value,
            "status": self.status.value,
        }


@dataclass
class Session:
    size: int
    lines: tuple[Line, ...]
    board: Board
    current_player: Cell
    status: GameStatus
    winning_line: Line
    history: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def new(cls, size: int) -> "Session":
        lines = generate_lines(size)
        board = empty_board(size)
        initial = HistoryEntry(board=board, current_player=FIRST_PLAYER,
                               status=GameStatus.NOT_STARTED)
        return cls(
            size=size,
            lines=lines,
            board=board,
            current_player=FIRST_PLAYER,
            status=GameStatus.NOT_STARTED,
            winning_line=(),
            history=[initial],
        )

    def restore(self, entry: HistoryEntry) -> None:
        self.board = entry.board
        self.current_player = entry.current_player
        self.status = entry.status
        self.winning_line = entry.winning_line

    def current_entry(self) -> HistoryEntry:
        return HistoryEntry(
            board=self.board,
            current_player=self.current_player,
            status=self.status,
            winning_line=self.winning_line,
        )


Listener = Callable[[GameStateChanged], None]


class GameEngine:
    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        self.session = Session.new(size)
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def size(self) -> int:
        return self.session.size

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self.session.history)

    @property
    def can_undo(self) -> bool:
        return len(self.session.history) > 1

    def move(self, index: int) -> bool:
        """
        Place the current player's marker at index.

        Out-of-range indexes, occupied cells and finished games are ignored
        without raising. Returns True when the move was applied.
        """
        session = self.session
        if not 0 <= index < len(session.board):
            return False
        if session.board[index].is_marker or not session.status.accepts_moves:
            return False

        mover = session.current_player
        board = session.board[:index] + (mover,) + session.board[index + 1:]
        outcome = detect(board, session.lines)

        if session.status is GameStatus.NOT_STARTED:
            # A single marker can never fill a line of length >= 2
            assert outcome is None, f"First move produced an outcome: {outcome!r}"
            status = GameStatus.IN_PROGRESS
        else:
            status = status_for(outcome)

        session.board = board
        session.status = status
        session.winning_line = outcome.line if outcome is not None else ()
        session.current_player = mover.opponent
        session.history.append(session.current_entry())

        self._publish(GameStateChanged(board=board, current_player=mover, status=status))
        return True

    def undo(self) -> bool:
        """Drop the latest history entry and restore the one before it."""
        session = self.session
        if len(session.history) <= 1:
            return False
        session.history.pop()
        session.restore(session.history[-1])
        return True

    def reset(self, size: int | None = None) -> None:
        """Start a new game, optionally on a board of a different size."""
        self.session = Session.new(self.session.size if size is None else size)

    def snapshot(self) -> dict:
        session = self.session
        return {
            "size": session.size,
            "board": board_to_json(session.board),
            "current_player": session.current_player.value,
            "status": session.status.value,
            "status_message": session.status.message,
            "winning_line": list(session.winning_line),
            "history_length": len(session.history),
            "can_undo": self.can_undo,
        }

    def _publish(self, event: GameStateChanged) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener {listener!r} failed handling {event.status.value}")
