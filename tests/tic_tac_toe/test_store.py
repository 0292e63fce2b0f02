"""
Unit tests for the Tic-Tac-Toe game store (SQLite in-memory, no Postgres).
"""
import unittest
from unittest.mock import MagicMock, patch

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.projects.tic_tac_toe.core.constants import Cell, GameStatus
from app.projects.tic_tac_toe.core.engine import GameEngine, GameStateChanged
from app.projects.tic_tac_toe.models import TicTacToeGame
from app.projects.tic_tac_toe.services.game_store import GameStore, MoveRecorder, count_results


def _create_test_app():
    """Minimal app with an in-memory database."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
    db.init_app(app)
    return app


def _record(status, board=None, player="X"):
    return {
        "board": board or ["X", "X", "X", "O", "O", None, None, None, None],
        "current_player": player,
        "status": status,
    }


class StoreTestCase(unittest.TestCase):

    def setUp(self):
        self.app = _create_test_app()
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.store = GameStore()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()


class TestInsert(StoreTestCase):

    def test_insert_persists_record(self):
        game = self.store.insert(_record("Player X won"))
        self.assertIsNotNone(game.id)
        stored = db.session.get(TicTacToeGame, game.id)
        self.assertEqual(stored.board, ["X", "X", "X", "O", "O", None, None, None, None])
        self.assertEqual(stored.current_player, "X")
        self.assertEqual(stored.status, "Player X won")
        self.assertIsNotNone(stored.created_at)
        self.assertEqual(stored.size, 3)
        self.assertTrue(stored.is_completed)

    def test_insert_failure_is_logged_and_returns_none(self):
        with patch.object(db.session, "commit", side_effect=SQLAlchemyError("database down")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR") as logs:
                self.assertIsNone(self.store.insert(_record("in_progress")))
        self.assertIn("database down", logs.output[0])
        self.assertEqual(TicTacToeGame.query.count(), 0)


class TestQueries(StoreTestCase):

    def test_scoreboard_only_lists_finished_games_newest_first(self):
        self.store.insert(_record("start"))
        first = self.store.insert(_record("Player X won"))
        self.store.insert(_record("in_progress"))
        second = self.store.insert(_record("draw"))
        third = self.store.insert(_record("Player O won", player="O"))

        self.assertEqual(self.store.scoreboard(), [
            {"id": third.id, "status": "Player O won"},
            {"id": second.id, "status": "draw"},
            {"id": first.id, "status": "Player X won"},
        ])

    def test_scoreboard_is_limited(self):
        for _ in range(12):
            self.store.insert(_record("draw"))
        games = self.store.scoreboard()
        self.assertEqual(len(games), 10)
        ids = [g["id"] for g in games]
        self.assertEqual(ids, sorted(ids, reverse=True))
        self.assertEqual(len(self.store.scoreboard(3)), 3)

    def test_recent_completed_includes_boards(self):
        board = ["O"] * 4 + [None] * 12
        game = self.store.insert(_record("Player O won", board=board, player="O"))
        self.store.insert(_record("in_progress"))

        recent = self.store.recent_completed(5)
        self.assertEqual(len(recent), 1)
        self.assertEqual(recent[0]["id"], game.id)
        self.assertEqual(recent[0]["board"], board)
        self.assertEqual(recent[0]["size"], 4)
        self.assertIn("created_at", recent[0])

    def test_get(self):
        game = self.store.insert(_record("draw"))
        self.assertEqual(self.store.get(game.id)["status"], "draw")
        self.assertIsNone(self.store.get(9999))

    def test_result_counts(self):
        for status in ("Player X won", "Player X won", "draw", "in_progress", "Player O won"):
            self.store.insert(_record(status))
        self.assertEqual(self.store.result_counts(), {
            "Player X won": 2,
            "Player O won": 1,
            "draw": 1,
        })
        self.assertEqual(self.store.result_counts(limit=2), {
            "Player X won": 0,
            "Player O won": 1,
            "draw": 1,
        })

    def test_read_failures_return_none(self):
        self.store.insert(_record("draw"))
        with patch.object(GameStore, "_completed_query", side_effect=SQLAlchemyError("timeout")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR"):
                self.assertIsNone(self.store.scoreboard())
                self.assertIsNone(self.store.recent_completed())
                self.assertIsNone(self.store.result_counts(limit=5))
        with patch.object(db.session, "get", side_effect=SQLAlchemyError("timeout")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR"):
                self.assertIsNone(self.store.get(1))

    def test_purge_failure_returns_none(self):
        self.store.insert(_record("in_progress"))
        with patch.object(db.session, "commit", side_effect=SQLAlchemyError("database down")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR"):
                self.assertIsNone(self.store.purge_in_progress())

    def test_count_results_ignores_unfinished_statuses(self):
        rows = [("draw", 2), ("Player X won", 1), ("in_progress", 4), ("draw", 1)]
        self.assertEqual(count_results(rows), {
            "Player X won": 1,
            "Player O won": 0,
            "draw": 3,
        })

    def test_purge_in_progress_keeps_finished_games(self):
        for status in ("start", "in_progress", "in_progress", "Player X won", "draw"):
            self.store.insert(_record(status))
        self.assertEqual(self.store.purge_in_progress(), 3)
        self.assertEqual(
            sorted(g.status for g in TicTacToeGame.query.all()),
            ["Player X won", "draw"],
        )


class TestMoveRecorder(StoreTestCase):

    def test_every_move_is_stored(self):
        recorder = MoveRecorder(self.store)
        engine = GameEngine(3)
        engine.subscribe(recorder)
        for index in (0, 4, 1, 5, 2):
            engine.move(index)

        rows = TicTacToeGame.query.order_by(TicTacToeGame.id).all()
        self.assertEqual([r.status for r in rows],
                         ["in_progress", "in_progress", "in_progress", "in_progress", "Player X won"])
        self.assertEqual([r.current_player for r in rows], ["X", "O", "X", "O", "X"])
        self.assertEqual(rows[-1].board, ["X", "X", "X", None, "O", "O", None, None, None])
        self.assertEqual(recorder.refresh_key, 5)
        self.assertEqual(self.store.scoreboard(), [{"id": rows[-1].id, "status": "Player X won"}])

    def test_refresh_key_increments_when_write_fails(self):
        recorder = MoveRecorder(self.store)
        event = GameStateChanged(board=(Cell.X,) + (Cell.EMPTY,) * 8, current_player=Cell.X,
                                 status=GameStatus.IN_PROGRESS)
        with patch.object(db.session, "commit", side_effect=SQLAlchemyError("database down")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR"):
                recorder(event)
        self.assertEqual(recorder.refresh_key, 1)
        self.assertEqual(TicTacToeGame.query.count(), 0)

    def test_refresh_key_increments_when_insert_raises(self):
        store = MagicMock()
        store.insert.side_effect = KeyError("board")
        recorder = MoveRecorder(store)
        engine = GameEngine(3)
        engine.subscribe(recorder)
        with self.assertLogs("app.projects.tic_tac_toe.core.engine", level="ERROR"):
            self.assertTrue(engine.move(0))
        self.assertEqual(recorder.refresh_key, 1)
        self.assertEqual(engine.session.board[0], Cell.X)

    def test_failed_write_does_not_change_game(self):
        engine = GameEngine(3)
        engine.subscribe(MoveRecorder(self.store))
        with patch.object(db.session, "commit", side_effect=SQLAlchemyError("database down")):
            with self.assertLogs("app.projects.tic_tac_toe.services.game_store", level="ERROR"):
                self.assertTrue(engine.move(4))
        self.assertEqual(engine.session.board[4], Cell.X)
        self.assertEqual(engine.session.status, GameStatus.IN_PROGRESS)
        self.assertEqual(len(engine.history), 2)


if __name__ == "__main__":
    unittest.main()
