import asyncio
from contextlib import asynccontextmanager
from typing import Any, Dict

from app.core.exceptions import BusyError


class ItemLockRegistry:
    """
    Hands out one asyncio.Lock per item id so reservations against the same
    item run one at a time while different items proceed independently.
    Locks are dropped once nobody holds or waits on them.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    def __len__(self):
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, item_id: Any, timeout: float):
        key = str(item_id)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout)
            except asyncio.TimeoutError:
                raise BusyError(item_id) from None
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]
