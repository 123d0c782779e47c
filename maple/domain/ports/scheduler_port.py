"""
スケジューラポート
単一スレッドのイベントループ上での遅延実行を抽象化
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime


class ScheduledHandle(ABC):
    """スケジュール済みコールバックのハンドル"""

    @abstractmethod
    def cancel(self) -> None:
        """未発火なら発火させない（発火済みなら何もしない）"""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """取り消されたかどうか"""


class IScheduler(ABC):
    """
    スケジューラインターフェース

    すべてのコールバックはイベントループのスレッド上で呼ばれる。
    バックグラウンドスレッドでの実行はしないため、ロックは不要。
    """

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        """
        コールバックを遅延実行

        Args:
            delay: 遅延（秒、0以上）
            callback: 引数なしのコールバック

        Returns:
            ScheduledHandle: 取り消し用ハンドル
        """

    @abstractmethod
    def now(self) -> datetime:
        """
        スケジューラの時計での現在時刻

        Returns:
            datetime: 現在時刻
        """

    @property
    @abstractmethod
    def pending_count(self) -> int:
        """
        未発火（取り消されていない）コールバック数

        Returns:
            int: 件数
        """
