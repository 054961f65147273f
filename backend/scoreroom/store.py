import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Iterator, Optional

from scoreroom.errors import SessionNotFound
from scoreroom.models import Category, Session


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionStore:
    """In-memory owner of every Session in the process.

    Each session has its own lock; callers wrap a whole operation
    (read, mutate, put, broadcast) in ``locked()`` so concurrent events for
    the same session apply one at a time. Sessions live until the process
    exits.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_id,
                 clock: Callable[[], str] = utc_now_iso):
        self.new_id = id_factory
        self.now = clock
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def create(self, name: str, facilitator_name: str, categories: Iterable[Category]) -> Session:
        session = Session(
            id=self.new_id(),
            name=name,
            facilitator_name=facilitator_name,
            created_at=self.now(),
            categories=list(categories),
        )
        with self._guard:
            if session.id in self._sessions:
                raise RuntimeError(f'session id collision: {session.id}')
            self._sessions[session.id] = session
            self._locks[session.id] = threading.Lock()
        return session

    def get(self, session_id: str) -> Optional[Session]:
        with self._guard:
            return self._sessions.get(session_id)

    def put(self, session: Session) -> None:
        with self._guard:
            if session.id not in self._sessions:
                raise RuntimeError(f'put for unknown session: {session.id}')
            self._sessions[session.id] = session

    @contextmanager
    def locked(self, session_id: str) -> Iterator[Session]:
        """Hold the session's lock for the duration of one operation.

        Raises SessionNotFound when no session has that id.
        """
        with self._guard:
            lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFound()
        with lock:
            yield self._sessions[session_id]

    def __len__(self):
        with self._guard:
            return len(self._sessions)

    def __contains__(self, session_id):
        with self._guard:
            return session_id in self._sessions
