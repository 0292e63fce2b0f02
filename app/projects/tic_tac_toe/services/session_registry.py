"""
Per-browser game sessions.

Each browser gets its own GameEngine, looked up by a key stored in the Flask
session cookie. Engines live in process memory; a restart starts everyone on a
fresh board (finished games are already in the database). The registry keeps
at most `max_tables` tables and drops any table idle for longer than
`idle_timeout` seconds, least recently used first.
"""
from collections import OrderedDict
import threading
import time
import uuid

from app.projects.tic_tac_toe.core.engine import GameEngine
from app.projects.tic_tac_toe.services.game_store import GameStore, MoveRecorder

MAX_TABLES = 1000
IDLE_TIMEOUT = 60 * 60


class GameTable:
    """An engine plus the recorder that persists its moves.

    Hold `lock` around every engine call and state read; two requests from the
    same browser may arrive on different threads.
    """

    def __init__(self, size, store=None):
        self.engine = GameEngine(size)
        self.recorder = MoveRecorder(store)
        self.engine.subscribe(self.recorder)
        self.lock = threading.Lock()

    @property
    def refresh_key(self):
        return self.recorder.refresh_key

    def state(self):
        data = self.engine.snapshot()
        data['refresh_key'] = self.refresh_key
        return data


class SessionRegistry:
    def __init__(self, store_factory=GameStore, max_tables=MAX_TABLES,
                 idle_timeout=IDLE_TIMEOUT, clock=time.monotonic):
        self._tables = OrderedDict()  # key -> (table, last_used)
        self._lock = threading.Lock()
        self._store_factory = store_factory
        self._max_tables = max_tables
        self._idle_timeout = idle_timeout
        self._clock = clock

    def new_key(self):
        return uuid.uuid4().hex

    def get(self, key, size):
        """Return the table for key, creating one with a board of `size` if needed."""
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            entry = self._tables.pop(key, None)
            table = entry[0] if entry else GameTable(size, self._store_factory())
            self._tables[key] = (table, now)
            while len(self._tables) > self._max_tables:
                self._tables.popitem(last=False)
            return table

    def _evict_idle(self, now):
        # Oldest entries come first, so stop at the first one still in use
        while self._tables:
            key, (_, last_used) = next(iter(self._tables.items()))
            if now - last_used <= self._idle_timeout:
                break
            del self._tables[key]

    def __contains__(self, key):
        with self._lock:
            return key in self._tables

    def __len__(self):
        with self._lock:
            return len(self._tables)


registry = SessionRegistry()
