"""Named asyncio locks serializing read-modify-write sections."""
import asyncio
import weakref
from typing import Dict

# asyncio locks are bound to the loop that first waits on them
_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[str, asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def named_lock(name: str) -> asyncio.Lock:
    """Lock shared by every coroutine of the running loop using the same name."""
    loop = asyncio.get_running_loop()
    locks = _locks.setdefault(loop, {})
    lock = locks.get(name)
    if lock is None:
        lock = locks[name] = asyncio.Lock()
    return lock
