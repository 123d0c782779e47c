"""
仮想時計スケジューラアダプター
実時間を待たずに遅延コールバックを決定的に発火させる
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from datetime import datetime, timedelta

from ...core.exceptions import SchedulerError
from ...domain.ports.scheduler_port import IScheduler, ScheduledHandle


class ManualHandle(ScheduledHandle):
    """仮想時計上の予約"""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(IScheduler):
    """
    仮想時計スケジューラ

    - 発火順は予定時刻順、同時刻なら予約順
    - advance() で時計を進め、到達したコールバックを発火する
    - コールバック内で予約されたものも同じ advance の範囲内なら発火する
    """

    def __init__(self, start: datetime | None = None):
        self._start = start or datetime.now()
        self._elapsed = 0.0
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._sequence = itertools.count()

    @property
    def elapsed(self) -> float:
        """開始からの仮想経過秒数"""
        return self._elapsed

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        if delay < 0:
            raise SchedulerError("遅延は0以上である必要があります", delay=delay)
        handle = ManualHandle(self._elapsed + delay, callback)
        heapq.heappush(self._queue, (handle.due, next(self._sequence), handle))
        return handle

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    @property
    def next_due(self) -> float | None:
        """次に発火する予定の仮想時刻"""
        for due, _, handle in sorted(self._queue):
            if not handle.cancelled:
                return due
        return None

    def advance(self, seconds: float) -> int:
        """
        時計を進める

        Args:
            seconds: 進める秒数

        Returns:
            int: 発火したコールバック数
        """
        if seconds < 0:
            raise SchedulerError("時計を戻すことはできません", delay=seconds)
        target = self._elapsed + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            fired += self._fire_next()
        self._elapsed = target
        return fired

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """保留がなくなるまで時計を進める"""
        fired = 0
        while self._queue:
            if fired >= max_callbacks:
                raise SchedulerError(
                    "コールバックが収束しません",
                    details={"max_callbacks": max_callbacks},
                )
            fired += self._fire_next()
        return fired

    def _fire_next(self) -> int:
        due, _, handle = heapq.heappop(self._queue)
        if handle.cancelled:
            return 0
        self._elapsed = max(self._elapsed, due)
        handle.callback()
        return 1
