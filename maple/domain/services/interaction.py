"""
インタラクションエンジン
ユーザー操作をコンパニオン状態へ反映し、アニメーションと発話を起こす
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from ...core.exceptions import ValidationError
from ...core.logging import get_logger, log_business_event
from ..events import Publisher
from ..models.companion import (
    AnimationCue,
    CompanionAction,
    CompanionMood,
    CompanionSnapshot,
    CompanionState,
    clamp_trait,
)
from ..ports.scheduler_port import IScheduler, ScheduledHandle
from ..ports.speech_port import ISpeechOutput

logger = get_logger("interaction")


@dataclass(frozen=True)
class InteractionEffect:
    """1つのアクションがもたらす効果"""

    energy_delta: int
    mood: CompanionMood
    animation: AnimationCue
    line: str


INTERACTION_EFFECTS: dict[CompanionAction, InteractionEffect] = {
    CompanionAction.PLAY: InteractionEffect(
        energy_delta=-10,
        mood=CompanionMood.EXCITED,
        animation=AnimationCue.JUMP,
        line="Let's play together! This is so much fun!",
    ),
    CompanionAction.FEED: InteractionEffect(
        energy_delta=20,
        mood=CompanionMood.HAPPY,
        animation=AnimationCue.HAPPY,
        line="Yummy! Thank you for the energy boost!",
    ),
    CompanionAction.CHAT: InteractionEffect(
        energy_delta=0,
        mood=CompanionMood.THOUGHTFUL,
        animation=AnimationCue.TALKING,
        line="I'd love to chat with you. What's on your mind?",
    ),
    CompanionAction.REST: InteractionEffect(
        energy_delta=30,
        mood=CompanionMood.SLEEPY,
        animation=AnimationCue.SLEEPING,
        line="A little rest sounds perfect. Sweet dreams!",
    ),
}


class InteractionEngine:
    """
    インタラクションエンジン

    状態の変更はすべてスケジューラのループ上で行われる前提。

    アニメーションのリセット:
    - 既定では保留中のリセットを取り消さない（後から来たキューも
      先に予約されたリセットで idle に戻りうる）
    - cancel_superseded_resets=True で、新しいインタラクションが
      保留中のリセットを取り消す
    """

    def __init__(
        self,
        scheduler: IScheduler,
        speech: ISpeechOutput,
        state: CompanionState | None = None,
        name: str = "Maple",
        avatar: str = "robot",
        animation_reset_delay: float = 2.0,
        cancel_superseded_resets: bool = False,
    ):
        self._scheduler = scheduler
        self._speech = speech
        self._state = state or CompanionState(last_interaction=scheduler.now())
        self._name = name
        self._avatar = avatar
        self._animation_reset_delay = animation_reset_delay
        self._cancel_superseded_resets = cancel_superseded_resets

        self._animation = AnimationCue.IDLE
        self._is_speaking = False
        self._spoken_line: str | None = None
        self._pending_reset: ScheduledHandle | None = None
        self._publisher: Publisher[CompanionSnapshot] = Publisher("companion")

    # ===== 状態参照 =====

    @property
    def state(self) -> CompanionState:
        """現在状態のコピー（変更はエンジン経由のみ）"""
        return copy.deepcopy(self._state)

    @property
    def animation(self) -> AnimationCue:
        return self._animation

    @property
    def is_speaking(self) -> bool:
        return self._is_speaking

    @property
    def name(self) -> str:
        return self._name

    @property
    def avatar(self) -> str:
        return self._avatar

    def snapshot(self) -> CompanionSnapshot:
        """現在状態のスナップショット"""
        return CompanionSnapshot(
            name=self._name,
            avatar=self._avatar,
            mood=self._state.mood,
            energy=self._state.energy,
            last_interaction=self._state.last_interaction,
            personality=self._state.personality.to_dict(),
            animation=self._animation,
            is_speaking=self._is_speaking,
            spoken_line=self._spoken_line,
        )

    def subscribe(self, callback):
        """状態変更を購読（解除関数を返す）"""
        return self._publisher.subscribe(callback)

    # ===== 操作 =====

    def interact(self, action: CompanionAction | str) -> None:
        """
        インタラクションを適用

        Args:
            action: play / feed / chat / rest
        """
        action = CompanionAction(action)
        effect = INTERACTION_EFFECTS[action]

        self._state.last_interaction = self._scheduler.now()
        if effect.energy_delta:
            self._state.adjust_energy(effect.energy_delta)
        self._state.mood = effect.mood
        self._animation = effect.animation

        log_business_event(
            logger,
            "companion_interaction",
            action=action.value,
            mood=self._state.mood.value,
            energy=self._state.energy,
        )
        self._publish()

        self.speak(effect.line)
        self._schedule_animation_reset()

    def speak(self, text: str) -> None:
        """発話を開始（完了はスピーチ出力のコールバックで通知される）"""
        # アニメーションキューは変えない（各アクションのキューを表示し続ける）
        self._is_speaking = True
        self._spoken_line = text
        self._publish()
        self._speech.synthesize(text, self._on_speech_finished)

    def edit_personality(
        self,
        friendliness: float | None = None,
        helpfulness: float | None = None,
        humor: float | None = None,
        empathy: float | None = None,
    ) -> None:
        """性格特性を編集（指定された特性のみ、0.0-1.0 にクランプ）"""
        personality = self._state.personality
        updates = {
            "friendliness": friendliness,
            "helpfulness": helpfulness,
            "humor": humor,
            "empathy": empathy,
        }
        for trait, value in updates.items():
            if value is not None:
                setattr(personality, trait, clamp_trait(value))

        log_business_event(logger, "personality_edited", **personality.to_dict())
        self._publish()

    def rename(self, name: str) -> None:
        """コンパニオン名を変更"""
        if not name or not name.strip():
            raise ValidationError("コンパニオン名は必須です", field="name", value=name)
        self._name = name.strip()
        self._publish()

    def select_avatar(self, avatar: str) -> None:
        """アバターを選択"""
        if not avatar or not avatar.strip():
            raise ValidationError("アバター名は必須です", field="avatar", value=avatar)
        self._avatar = avatar.strip()
        self._publish()

    # ===== 遅延コールバック =====

    def _schedule_animation_reset(self) -> None:
        if self._cancel_superseded_resets and self._pending_reset is not None:
            self._pending_reset.cancel()
        self._pending_reset = self._scheduler.schedule(
            self._animation_reset_delay, self._reset_animation
        )

    def _reset_animation(self) -> None:
        self._animation = AnimationCue.IDLE
        self._publish()

    def _on_speech_finished(self, success: bool) -> None:
        self._is_speaking = False
        if self._animation is AnimationCue.TALKING:
            self._animation = AnimationCue.IDLE
        logger.debug("Speech finished", extra={"success": success})
        self._publish()

    def _publish(self) -> None:
        self._publisher.publish(self.snapshot())
