"""
応答生成サービス
キーワードグループによる定型応答の選択
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordGroup:
    """
    キーワードグループ

    terms のいずれかが（小文字化した）入力に部分一致すれば採用。
    responses が1件なら固定応答、複数なら一様ランダムに選ぶ。
    """

    name: str
    terms: tuple[str, ...]
    responses: tuple[str, ...]

    def matches(self, normalized: str) -> bool:
        return any(term in normalized for term in self.terms)


# 順序に意味がある（最初に一致したグループが勝つ）
DEFAULT_KEYWORD_GROUPS: tuple[KeywordGroup, ...] = (
    KeywordGroup(
        name="greeting",
        terms=("hello", "hi"),
        responses=(
            "Hey there! 🍁 Ready for another great conversation?",
            "Hello! It's wonderful to see you again! How's your day going?",
            "Hi friend! What adventures shall we embark on today? 🌟",
        ),
    ),
    KeywordGroup(
        name="how_are_you",
        terms=("how are you",),
        responses=(
            "I'm feeling energetic and ready to help! Like a crisp autumn day 🍂 What's on your mind?",
        ),
    ),
    KeywordGroup(
        name="help",
        terms=("help",),
        responses=(
            "I'm here to assist you with anything you need! Whether it's answering questions, "
            "having a chat, or just being a friendly companion. What can I do for you? 💫",
        ),
    ),
    KeywordGroup(
        name="maple",
        terms=("maple",),
        responses=(
            "You called? 🍁 That's me! I chose the name Maple because it represents growth, "
            "beauty, and the changing seasons - just like our conversations!",
        ),
    ),
    KeywordGroup(
        name="companion",
        terms=("companion",),
        responses=(
            "As your AI companion, I'm here to chat, help, and make your day a little brighter! "
            "You can customize my appearance and personality in the Companion tab. 🎨",
        ),
    ),
)

# {input} には元の入力をそのまま埋め込む
DEFAULT_FALLBACK_TEMPLATES: tuple[str, ...] = (
    "That's fascinating! Tell me more about {input}. I love learning new things! 🤔",
    "I appreciate you sharing \"{input}\" with me. Let's explore this topic together! 🌟",
    "Interesting perspective on {input}! Here's what I think about that... 💭",
    "Great question about {input}! Let me think about this for a moment... 🍁",
)


class ResponseGenerator:
    """
    応答生成サービス

    乱数以外の状態を持たない。同じ入力と同じ乱数列なら同じ応答を返す。
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        groups: tuple[KeywordGroup, ...] = DEFAULT_KEYWORD_GROUPS,
        fallback_templates: tuple[str, ...] = DEFAULT_FALLBACK_TEMPLATES,
    ):
        self._rng = rng or random.Random()
        self._groups = groups
        self._fallback_templates = fallback_templates

    @property
    def groups(self) -> tuple[KeywordGroup, ...]:
        return self._groups

    def match(self, input_text: str) -> KeywordGroup | None:
        """最初に一致したキーワードグループ（なければ None）"""
        normalized = input_text.casefold()
        for group in self._groups:
            if group.matches(normalized):
                return group
        return None

    def respond(self, input_text: str) -> str:
        """
        入力に対する応答を生成

        Args:
            input_text: ユーザー入力

        Returns:
            str: 応答テキスト
        """
        group = self.match(input_text)
        if group is not None:
            if len(group.responses) == 1:
                return group.responses[0]
            return self._rng.choice(group.responses)

        template = self._rng.choice(self._fallback_templates)
        return template.replace("{input}", input_text)
