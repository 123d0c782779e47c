"""
Domain Models
コンパニオン・会話・ユーザーのドメインモデル
"""

from .companion import (
    AnimationCue,
    CompanionAction,
    CompanionMood,
    CompanionSnapshot,
    CompanionState,
    PersonalityTraits,
)
from .conversation import (
    ChatLog,
    ChatSnapshot,
    Message,
    MessageType,
    Sender,
)
from .user import (
    SessionSnapshot,
    UserIdentity,
)

__all__ = [
    # コンパニオン
    "CompanionMood",
    "CompanionAction",
    "AnimationCue",
    "PersonalityTraits",
    "CompanionState",
    "CompanionSnapshot",
    # 会話（セッション中のみ、保存しない）
    "Sender",
    "MessageType",
    "Message",
    "ChatLog",
    "ChatSnapshot",
    # ユーザー
    "UserIdentity",
    "SessionSnapshot",
]
