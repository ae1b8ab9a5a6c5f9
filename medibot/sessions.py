"""In-memory store of dialogue sessions keyed by conversation id.

Sessions live for the lifetime of the process, bounded by ``max_sessions``:
when the store is full the least-recently-used conversation without a turn
in progress is dropped.  Each conversation has its own lock so concurrent
turns of the same conversation are serialised while different
conversations never block each other.  The default conversation is never
evicted.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from medibot.dialogue import Session

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"
DEFAULT_MAX_SESSIONS = 1000


@dataclass
class _Entry:
    session: Session = field(default_factory=Session)
    lock: threading.Lock = field(default_factory=threading.Lock)
    active_turns: int = 0


class SessionStore:
    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        self._max_sessions = max(1, max_sessions)
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._guard = threading.Lock()

    def _entry(self, session_id: str, *, claim: bool = False) -> _Entry:
        """Look up (or create) an entry.  Caller must NOT hold the guard."""
        with self._guard:
            entry = self._entries.get(session_id)
            if entry is None:
                entry = _Entry()
                self._entries[session_id] = entry
                self._evict_if_needed(keep=session_id)
            else:
                # Promote to most-recently-used
                self._entries.move_to_end(session_id)
            if claim:
                entry.active_turns += 1
            return entry

    def _evict_if_needed(self, keep: str) -> None:
        """Drop LRU conversations until within bounds.  Caller holds the guard."""
        for key in list(self._entries):
            if len(self._entries) <= self._max_sessions:
                return
            if key in (keep, DEFAULT_SESSION_ID) or self._entries[key].active_turns:
                continue
            del self._entries[key]
            logger.debug("Session store: evicted %s", key)

    def get(self, session_id: str = DEFAULT_SESSION_ID) -> Session:
        """Return the session for *session_id*, creating an empty one."""
        return self._entry(session_id).session

    @contextmanager
    def lock(self, session_id: str = DEFAULT_SESSION_ID) -> Iterator[Session]:
        """Hold the conversation's lock for one turn and yield its session.

        The entry is claimed before the lock is awaited, so it cannot be
        evicted while a turn is queued on it.
        """
        entry = self._entry(session_id, claim=True)
        try:
            with entry.lock:
                yield entry.session
        finally:
            with self._guard:
                entry.active_turns -= 1

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
