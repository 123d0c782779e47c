from .asyncio_loop import AsyncioScheduler
from .manual import ManualScheduler

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
]
