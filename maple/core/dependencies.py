"""
依存性注入コンテナ
セッションごとに一度だけサービスを組み立て、参照で渡す
"""

from __future__ import annotations

import random
from typing import Optional

from ..adapters.speech.scheduled import ScheduledSpeechOutput
from ..domain.models.companion import CompanionMood, CompanionState, PersonalityTraits
from ..domain.ports.scheduler_port import IScheduler
from ..domain.ports.speech_port import ISpeechOutput
from ..domain.services.chat import ChatSession
from ..domain.services.identity import IdentityService
from ..domain.services.interaction import InteractionEngine
from ..domain.services.response import ResponseGenerator
from .config import MapleSettings, get_settings
from .logging import MapleLogger, get_logger

logger = get_logger("dependencies")


class CompanionApp:
    """
    コンパニオンアプリのセッションコンテナ

    グローバルなシングルトンは持たない。プロセス開始時に1つ作り、
    プレゼンテーション層へ明示的に渡す。
    """

    def __init__(
        self,
        scheduler: IScheduler,
        settings: Optional[MapleSettings] = None,
        speech: Optional[ISpeechOutput] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        self.scheduler = scheduler

        MapleLogger.configure(self.settings.effective_log_level)

        # 乱数源は応答選択と返信遅延で共有（シード指定で再現可能）
        self.rng = rng or random.Random(self.settings.random_seed)

        timing = self.settings.timing
        companion = self.settings.companion

        self.speech = speech or ScheduledSpeechOutput(scheduler, delay=timing.speech_delay)
        self.responder = ResponseGenerator(rng=self.rng)

        self.interaction = InteractionEngine(
            scheduler=scheduler,
            speech=self.speech,
            state=CompanionState(
                mood=CompanionMood(companion.initial_mood),
                energy=companion.initial_energy,
                last_interaction=scheduler.now(),
                personality=PersonalityTraits(
                    friendliness=companion.friendliness,
                    helpfulness=companion.helpfulness,
                    humor=companion.humor,
                    empathy=companion.empathy,
                ),
            ),
            name=companion.name,
            avatar=companion.avatar,
            animation_reset_delay=timing.animation_reset_delay,
            cancel_superseded_resets=timing.cancel_superseded_resets,
        )
        self.chat = ChatSession(
            scheduler=scheduler,
            responder=self.responder,
            rng=self.rng,
            companion_name=companion.name,
            reply_delay_min=timing.reply_delay_min,
            reply_delay_max=timing.reply_delay_max,
        )
        self.identity = IdentityService(scheduler, login_delay=timing.login_delay)

        logger.debug("Companion session assembled", extra={"companion": companion.name})
