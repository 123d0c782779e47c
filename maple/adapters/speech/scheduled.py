"""
音声合成スタブ
一定時間後に必ず成功を通知する
"""

from collections.abc import Callable

from ...core.logging import get_logger, log_business_event
from ...domain.ports.scheduler_port import IScheduler
from ...domain.ports.speech_port import ISpeechOutput

logger = get_logger("speech")


class ScheduledSpeechOutput(ISpeechOutput):
    """実際の TTS の代わりに、ログを残して delay 秒後に完了を通知する"""

    def __init__(self, scheduler: IScheduler, delay: float = 2.0):
        self._scheduler = scheduler
        self._delay = delay

    def synthesize(self, text: str, completion: Callable[[bool], None]) -> None:
        log_business_event(logger, "tts", text=text)
        self._scheduler.schedule(self._delay, lambda: completion(True))
