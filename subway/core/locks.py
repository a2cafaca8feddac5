"""Per-line mutual exclusion for chain mutations within one process.

Each line gets its own ``asyncio.Lock`` so that mutations of different lines
never wait on each other. Locks live in a weak registry and disappear once no
coroutine holds or awaits them. Cross-process exclusion is provided by the
``SELECT ... FOR UPDATE`` row lock taken in ``SectionService``.
"""

import asyncio
import threading
import uuid
import weakref
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

_line_locks: "weakref.WeakValueDictionary[uuid.UUID, asyncio.Lock]" = weakref.WeakValueDictionary()
_registry_lock = threading.Lock()


def get_line_lock(line_id: uuid.UUID) -> asyncio.Lock:
    """
    Return the lock guarding a line's chain, creating it on first use.

    Args:
        line_id: Line UUID

    Returns:
        The same lock object for as long as anyone references it
    """
    with _registry_lock:
        lock = _line_locks.get(line_id)
        if lock is None:
            lock = asyncio.Lock()
            _line_locks[line_id] = lock
        return lock


@asynccontextmanager
async def line_lock(line_id: uuid.UUID) -> AsyncGenerator[None]:
    """Hold the line's lock for the duration of the block."""
    lock = get_line_lock(line_id)
    async with lock:
        yield
