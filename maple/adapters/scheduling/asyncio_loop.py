"""
asyncio スケジューラアダプター
イベントループの call_later で遅延実行する
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime

from ...core.exceptions import SchedulerError
from ...core.logging import get_logger, log_error
from ...domain.ports.scheduler_port import IScheduler, ScheduledHandle

logger = get_logger("scheduler.asyncio")


class AsyncioHandle(ScheduledHandle):
    """asyncio.TimerHandle のラッパー"""

    def __init__(self, scheduler: "AsyncioScheduler"):
        self._scheduler = scheduler
        self._timer: asyncio.TimerHandle | None = None
        self._cancelled = False

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        self._scheduler._discard(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(IScheduler):
    """
    asyncio ベースのスケジューラ

    ループのスレッドからのみ使うこと（スレッドセーフではない）。
    loop を省略した場合は schedule 時点で実行中のループを使う。
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._pending: set[AsyncioHandle] = set()
        self._idle_waiters: list[asyncio.Future] = []
        self._closed = False

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        if self._closed:
            raise SchedulerError("スケジューラは既に閉じられています")
        if delay < 0:
            raise SchedulerError("遅延は0以上である必要があります", delay=delay)

        loop = self._loop or asyncio.get_running_loop()
        handle = AsyncioHandle(self)
        handle._timer = loop.call_later(delay, self._fire, handle, callback)
        self._pending.add(handle)
        return handle

    def now(self) -> datetime:
        return datetime.now()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def wait_until_idle(self) -> None:
        """保留中のコールバックがなくなるまで待つ（発火中に予約されたものも含む）"""
        while self._pending:
            waiter = asyncio.get_running_loop().create_future()
            self._idle_waiters.append(waiter)
            await waiter

    def close(self) -> None:
        """保留中のコールバックをすべて取り消し、以後の予約を拒否する"""
        for handle in list(self._pending):
            handle.cancel()
        self._closed = True

    def _fire(self, handle: AsyncioHandle, callback: Callable[[], None]) -> None:
        self._pending.discard(handle)
        try:
            callback()
        except Exception as e:
            log_error(logger, e, {"scheduler": "asyncio"})
            raise
        finally:
            self._notify_if_idle()

    def _discard(self, handle: AsyncioHandle) -> None:
        self._pending.discard(handle)
        self._notify_if_idle()

    def _notify_if_idle(self) -> None:
        if self._pending:
            return
        waiters, self._idle_waiters = self._idle_waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)
