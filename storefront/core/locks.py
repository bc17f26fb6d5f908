import asyncio
import weakref


class LockRegistry:
    """
    Locks shared by every request handled by one process.

    - ``for_user(user_id)`` guards a single user's cart from read to clear.
    - ``ledger`` serializes order recording, discount consumption and issuance.

    Acquire the user lock before the ledger lock, never the other way round.
    A user's lock lives only while some caller holds a reference to it, so
    idle users do not accumulate entries.
    """

    def __init__(self):
        self._user_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()
        self.ledger = asyncio.Lock()

    def for_user(self, user_id: str) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        return lock
