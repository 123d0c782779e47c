"""
変更通知
状態のスナップショットを購読者へ配信する
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from ..core.logging import get_logger, log_error

T = TypeVar("T")

logger = get_logger("events")


class Publisher(Generic[T]):
    """
    スナップショットの配信者

    購読順に同期的に呼び出す。購読者の例外はログに残し、
    他の購読者とコアの処理は継続する。
    """

    def __init__(self, topic: str):
        self._topic = topic
        self._subscribers: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        購読を登録

        Returns:
            購読解除用の関数
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, snapshot: T) -> None:
        """全購読者へ配信"""
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                log_error(logger, e, {"topic": self._topic})

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
