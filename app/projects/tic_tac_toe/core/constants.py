"""
Constants for Tic-Tac-Toe: board sizes, markers and persisted status strings.
"""
import enum

BOARD_SIZES = (3, 4, 5, 6)
DEFAULT_BOARD_SIZE = 3
SCOREBOARD_LIMIT = 10
RECENT_GAMES_MAX_LIMIT = 50


class Cell(enum.Enum):
    EMPTY = None
    X = "X"
    O = "O"

    @property
    def is_marker(self) -> bool:
        return self is not Cell.EMPTY

    @property
    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("An empty cell has no opponent")


FIRST_PLAYER = Cell.X


class GameStatus(enum.Enum):
    """Game status. Values are the exact strings written to the store."""
    NOT_STARTED = "start"
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    X_WON = "Player X won"
    O_WON = "Player O won"

    @classmethod
    def won_by(cls, marker: Cell) -> "GameStatus":
        if marker is Cell.X:
            return cls.X_WON
        if marker is Cell.O:
            return cls.O_WON
        raise ValueError(f"Not a marker: {marker!r}")

    @property
    def winner(self) -> Cell | None:
        return {GameStatus.X_WON: Cell.X, GameStatus.O_WON: Cell.O}.get(self)

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def accepts_moves(self) -> bool:
        return self in (GameStatus.NOT_STARTED, GameStatus.IN_PROGRESS)

    @property
    def message(self) -> str:
        """Heading shown above the board."""
        if self is GameStatus.NOT_STARTED:
            return "Click to start"
        if self is GameStatus.IN_PROGRESS:
            return "Game in Progress"
        return "Game Ended"


TERMINAL_STATUSES = frozenset({GameStatus.DRAW, GameStatus.X_WON, GameStatus.O_WON})

# Completed results in the order they are reported by stats
COMPLETED_STATUS_VALUES = (
    GameStatus.X_WON.value,
    GameStatus.O_WON.value,
    GameStatus.DRAW.value,
)
