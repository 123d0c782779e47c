"""
チャットセッション
メッセージの送信と、「考え中」の遅延を挟んだ返信
"""

from __future__ import annotations

import random

from ...core.logging import get_logger, log_business_event
from ..events import Publisher
from ..models.conversation import (
    ChatLog,
    ChatSnapshot,
    Message,
    MessageType,
    Sender,
)
from ..ports.scheduler_port import IScheduler
from .response import ResponseGenerator

logger = get_logger("chat")

WELCOME_TEMPLATE = "Hi! I'm {name}, your AI companion. How can I help you today? 🍁"


class ChatSession:
    """
    チャットセッション

    - 会話ログは追記専用（挿入順 = 表示順）
    - 返信は reply_delay_min〜reply_delay_max 秒の一様乱数で遅延
    - 返信は取り消されない。複数の返信が保留中でも、最初の返信で
      is_typing は False に戻る
    """

    def __init__(
        self,
        scheduler: IScheduler,
        responder: ResponseGenerator,
        rng: random.Random | None = None,
        companion_name: str = "Maple",
        reply_delay_min: float = 1.0,
        reply_delay_max: float = 2.5,
    ):
        self._scheduler = scheduler
        self._responder = responder
        self._rng = rng or random.Random()
        self._reply_delay_min = reply_delay_min
        self._reply_delay_max = reply_delay_max

        self._log = ChatLog()
        self._is_typing = False
        self._publisher: Publisher[ChatSnapshot] = Publisher("chat")

        self._log.append(Message(
            content=WELCOME_TEMPLATE.format(name=companion_name),
            sender=Sender.COMPANION,
            timestamp=self._scheduler.now(),
        ))

    @property
    def messages(self) -> tuple[Message, ...]:
        """会話ログの読み取り専用ビュー"""
        return self._log.snapshot()

    @property
    def is_typing(self) -> bool:
        return self._is_typing

    def snapshot(self) -> ChatSnapshot:
        return ChatSnapshot(messages=self._log.snapshot(), is_typing=self._is_typing)

    def subscribe(self, callback):
        """会話の変更を購読（解除関数を返す）"""
        return self._publisher.subscribe(callback)

    def send_message(
        self,
        text: str,
        message_type: MessageType = MessageType.TEXT,
        attachment_url: str | None = None,
    ) -> Message | None:
        """
        ユーザーメッセージを送信

        Args:
            text: メッセージ本文（空白のみなら何もしない）
            message_type: メッセージ種別
            attachment_url: 添付（画像・音声）の URL

        Returns:
            追加したユーザーメッセージ（無視した場合は None）
        """
        if not text or not text.strip():
            return None

        user_message = Message(
            content=text,
            sender=Sender.USER,
            timestamp=self._scheduler.now(),
            message_type=message_type,
            attachment_url=attachment_url,
        )
        self._log.append(user_message)
        self._is_typing = True
        log_business_event(logger, "message_sent", message_id=user_message.id)
        self._publish()

        delay = self._rng.uniform(self._reply_delay_min, self._reply_delay_max)
        self._scheduler.schedule(delay, lambda: self._deliver_reply(text))
        return user_message

    def _deliver_reply(self, input_text: str) -> None:
        self._is_typing = False
        reply = Message(
            content=self._responder.respond(input_text),
            sender=Sender.COMPANION,
            timestamp=self._scheduler.now(),
        )
        self._log.append(reply)
        log_business_event(logger, "reply_delivered", message_id=reply.id)
        self._publish()

    def _publish(self) -> None:
        self._publisher.publish(self.snapshot())
