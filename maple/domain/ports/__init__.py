"""
Domain Ports
依存性逆転のためのインターフェース定義
"""

from .scheduler_port import IScheduler, ScheduledHandle
from .speech_port import ISpeechOutput

__all__ = [
    "IScheduler",
    "ScheduledHandle",
    "ISpeechOutput",
]
