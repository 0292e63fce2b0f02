from app import db
from datetime import datetime
import math

from app.projects.tic_tac_toe.core.constants import GameStatus


class TicTacToeGame(db.Model):
    """One row per accepted move: the board after the move and the resulting status."""
    __tablename__ = 'tic_tac_toe_games'
    id = db.Column(db.Integer, primary_key=True)
    board = db.Column(db.JSON, nullable=False)  # row-major list of "X", "O" or null
    current_player = db.Column(db.String(1), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=GameStatus.NOT_STARTED.value, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    @property
    def size(self):
        return math.isqrt(len(self.board or []))

    @property
    def is_completed(self):
        return GameStatus(self.status).is_terminal

    def to_dict(self):
        return {
            'id': self.id,
            'board': list(self.board or []),
            'current_player': self.current_player,
            'status': self.status,
            'size': self.size,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<TicTacToeGame {self.id} {self.status}>'
