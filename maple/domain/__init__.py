"""
Maple Domain Layer
コアビジネスロジックとドメインモデル
"""

from __future__ import annotations

from .models import (
    AnimationCue,
    ChatLog,
    CompanionAction,
    CompanionMood,
    CompanionState,
    Message,
    MessageType,
    PersonalityTraits,
    Sender,
)

__all__ = [
    # コンパニオン
    "CompanionMood",
    "CompanionAction",
    "AnimationCue",
    "PersonalityTraits",
    "CompanionState",
    # 会話（セッション中のみ、保存しない）
    "Sender",
    "MessageType",
    "Message",
    "ChatLog",
]
