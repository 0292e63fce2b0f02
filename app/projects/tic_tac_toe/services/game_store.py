import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.projects.tic_tac_toe.core.constants import (
    COMPLETED_STATUS_VALUES,
    SCOREBOARD_LIMIT,
    GameStatus,
)
from app.projects.tic_tac_toe.models import TicTacToeGame

logger = logging.getLogger(__name__)


def count_results(rows):
    """Tally (status, count) pairs into wins per player and draws."""
    counts = {status: 0 for status in COMPLETED_STATUS_VALUES}
    for status, count in rows:
        if status in counts:
            counts[status] += count
    return counts


class GameStore:
    """
    Persistence for Tic-Tac-Toe moves and results.

    Every method catches database errors: the session is rolled back, the
    error is logged and the method returns None so callers can tell a failed
    read from an empty one.
    """

    def insert(self, record):
        """Insert one {board, current_player, status} record."""
        try:
            game = TicTacToeGame(
                board=list(record['board']),
                current_player=record['current_player'],
                status=record['status'],
            )
            db.session.add(game)
            db.session.commit()
            return game
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error saving tic-tac-toe move ({record.get('status')}): {str(e)}")
            return None

    def _completed_query(self):
        return TicTacToeGame.query.filter(
            TicTacToeGame.status.in_(COMPLETED_STATUS_VALUES)
        ).order_by(TicTacToeGame.created_at.desc(), TicTacToeGame.id.desc())

    def recent_completed(self, limit=SCOREBOARD_LIMIT):
        """Most recent finished games, newest first, with their final boards."""
        try:
            games = self._completed_query().limit(limit).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error loading recent tic-tac-toe games: {str(e)}")
            return None
        return [game.to_dict() for game in games]

    def scoreboard(self, limit=SCOREBOARD_LIMIT):
        """Id and result of the most recent finished games, newest first."""
        try:
            games = self._completed_query().limit(limit).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error loading tic-tac-toe scoreboard: {str(e)}")
            return None
        return [{'id': game.id, 'status': game.status} for game in games]

    def get(self, game_id):
        try:
            game = db.session.get(TicTacToeGame, game_id)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error loading tic-tac-toe game {game_id}: {str(e)}")
            return None
        return game.to_dict() if game else None

    def result_counts(self, limit=None):
        """
        Count wins per player and draws.

        Args:
            limit (int, optional): Only count the most recent `limit` finished
                                   games. Counts every finished game when None.
        """
        try:
            if limit is None:
                rows = db.session.query(
                    TicTacToeGame.status, func.count(TicTacToeGame.id)
                ).filter(
                    TicTacToeGame.status.in_(COMPLETED_STATUS_VALUES)
                ).group_by(TicTacToeGame.status).all()
            else:
                rows = [(game.status, 1) for game in self._completed_query().limit(limit).all()]
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error counting tic-tac-toe results: {str(e)}")
            return None

        return count_results(rows)

    def purge_in_progress(self):
        """Delete intermediate move records (start and in-progress). Returns the number deleted."""
        try:
            deleted = TicTacToeGame.query.filter(
                TicTacToeGame.status.in_([GameStatus.NOT_STARTED.value, GameStatus.IN_PROGRESS.value])
            ).delete(synchronize_session=False)
            db.session.commit()
            return deleted
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error purging unfinished tic-tac-toe records: {str(e)}")
            return None


class MoveRecorder:
    """
    Engine listener that stores every move.

    refresh_key goes up after each write attempt, whether or not it succeeded;
    the page re-reads the scoreboard whenever it changes.
    """

    def __init__(self, store=None):
        self.store = store or GameStore()
        self.refresh_key = 0

    def __call__(self, event):
        try:
            self.store.insert(event.to_record())
        finally:
            self.refresh_key += 1
