"""
会話モデル
メッセージと追記専用の会話ログを定義
"""

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Sender(Enum):
    """送信者"""
    USER = "user"
    COMPANION = "companion"


class MessageType(Enum):
    """メッセージ種別"""
    TEXT = "text"
    IMAGE = "image"
    VOICE = "voice"
    ACTION = "action"   # コンパニオンへのアクション


@dataclass(frozen=True)
class Message:
    """個別メッセージ（作成後は変更しない）"""
    content: str
    sender: Sender
    timestamp: datetime = field(default_factory=datetime.now)
    message_type: MessageType = MessageType.TEXT
    attachment_url: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
            "message_type": self.message_type.value,
            "attachment_url": self.attachment_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        return cls(
            id=data["id"],
            content=data["content"],
            sender=Sender(data["sender"]),
            timestamp=datetime.fromisoformat(data.get("timestamp", datetime.now().isoformat())),
            message_type=MessageType(data.get("message_type", "text")),
            attachment_url=data.get("attachment_url"),
        )


class ChatLog:
    """
    会話ログ（セッション中のみ保持）

    追記専用。挿入順が表示順で、削除・更新の手段は提供しない。
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        """メッセージを追加"""
        self._messages.append(message)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def snapshot(self) -> tuple[Message, ...]:
        """現時点のメッセージ列（不変）"""
        return tuple(self._messages)


@dataclass(frozen=True)
class ChatSnapshot:
    """購読者に渡す会話状態"""
    messages: tuple[Message, ...]
    is_typing: bool
