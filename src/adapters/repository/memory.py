"""
In-memory repository adapter - Implements RegistrantRepository protocol.

Volatile fallback used when no DATABASE_URL is configured (local development).
Records live in a dict keyed by email and are lost on restart.
"""

import threading
from datetime import datetime, timezone

from src.domain.exceptions import DuplicateEmail
from src.domain.ports import Registrant


class InMemoryRegistrantRepository:
    """
    Implements RegistrantRepository protocol with a lock-guarded dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The lock makes the existence check and the write in insert() atomic,
    so concurrent inserts for one email cannot both succeed.
    """

    def __init__(self) -> None:
        self._registrants: dict[str, Registrant] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Registrant | None:
        with self._lock:
            return self._registrants.get(email)

    def insert(self, name: str, email: str, phone: str) -> Registrant:
        with self._lock:
            if email in self._registrants:
                raise DuplicateEmail(email)
            registrant = Registrant(
                name=name,
                email=email,
                phone=phone,
                created_at=datetime.now(timezone.utc),
            )
            self._registrants[email] = registrant
            return registrant

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrants)
