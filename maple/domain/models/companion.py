"""
コンパニオンモデル
気分・エネルギー・性格特性とアニメーション状態を定義
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

ENERGY_MIN = 0
ENERGY_MAX = 100
TRAIT_MIN = 0.0
TRAIT_MAX = 1.0
TRAIT_NAMES = frozenset(["friendliness", "helpfulness", "humor", "empathy"])


class CompanionMood(Enum):
    """
    コンパニオンの気分
    遷移制約なし（最後のインタラクションが決める）
    """

    HAPPY = "happy"
    NEUTRAL = "neutral"
    THOUGHTFUL = "thoughtful"
    EXCITED = "excited"
    SLEEPY = "sleepy"


class CompanionAction(Enum):
    """ユーザーが起こせるインタラクション"""

    PLAY = "play"
    FEED = "feed"
    CHAT = "chat"
    REST = "rest"


class AnimationCue(Enum):
    """一時的なアニメーション状態（保存しない）"""

    IDLE = "idle"
    HAPPY = "happy"
    JUMP = "jump"
    TALKING = "talking"
    SLEEPING = "sleeping"


MOOD_TEXT = {
    CompanionMood.HAPPY: "Happy & Energetic",
    CompanionMood.NEUTRAL: "Calm & Ready",
    CompanionMood.THOUGHTFUL: "Deep in Thought",
    CompanionMood.EXCITED: "Super Excited!",
    CompanionMood.SLEEPY: "A bit Sleepy",
}

MOOD_EMOJI = {
    CompanionMood.HAPPY: "😊",
    CompanionMood.NEUTRAL: "😐",
    CompanionMood.THOUGHTFUL: "🤔",
    CompanionMood.EXCITED: "🤩",
    CompanionMood.SLEEPY: "😴",
}


def clamp_energy(value: int) -> int:
    return max(ENERGY_MIN, min(ENERGY_MAX, int(value)))


def clamp_trait(value: float) -> float:
    return max(TRAIT_MIN, min(TRAIT_MAX, float(value)))


@dataclass
class PersonalityTraits:
    """
    性格特性 (0.0-1.0)
    値は常にクランプされる
    """

    friendliness: float = 0.9
    helpfulness: float = 0.85
    humor: float = 0.7
    empathy: float = 0.95

    def __setattr__(self, name: str, value: Any) -> None:
        # 代入のたびにクランプ
        if name in TRAIT_NAMES:
            value = clamp_trait(value)
        super().__setattr__(name, value)

    def to_dict(self) -> dict[str, float]:
        return {
            "friendliness": self.friendliness,
            "helpfulness": self.helpfulness,
            "humor": self.humor,
            "empathy": self.empathy,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonalityTraits":
        return cls(
            friendliness=data.get("friendliness", 0.9),
            helpfulness=data.get("helpfulness", 0.85),
            humor=data.get("humor", 0.7),
            empathy=data.get("empathy", 0.95),
        )


@dataclass
class CompanionState:
    """
    コンパニオン状態
    セッション中のみ保持（永続化しない）

    energy は 0-100 に、性格特性は 0.0-1.0 にクランプされる。
    """

    mood: CompanionMood = CompanionMood.HAPPY
    energy: int = 85
    last_interaction: datetime = field(default_factory=datetime.now)
    personality: PersonalityTraits = field(default_factory=PersonalityTraits)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "energy":
            value = clamp_energy(value)
        super().__setattr__(name, value)

    def adjust_energy(self, delta: int) -> int:
        """エネルギーを増減（クランプ付き）"""
        self.energy = clamp_energy(self.energy + delta)
        return self.energy

    @property
    def mood_text(self) -> str:
        return MOOD_TEXT[self.mood]

    @property
    def mood_emoji(self) -> str:
        return MOOD_EMOJI[self.mood]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mood": self.mood.value,
            "energy": self.energy,
            "last_interaction": self.last_interaction.isoformat(),
            "personality": self.personality.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompanionState":
        return cls(
            mood=CompanionMood(data.get("mood", "happy")),
            energy=data.get("energy", 85),
            last_interaction=datetime.fromisoformat(
                data.get("last_interaction", datetime.now().isoformat())
            ),
            personality=PersonalityTraits.from_dict(data.get("personality", {})),
        )


@dataclass(frozen=True)
class CompanionSnapshot:
    """購読者に渡す不変スナップショット"""

    name: str
    avatar: str
    mood: CompanionMood
    energy: int
    last_interaction: datetime
    personality: dict[str, float]
    animation: AnimationCue
    is_speaking: bool
    spoken_line: str | None = None

    @property
    def mood_text(self) -> str:
        return MOOD_TEXT[self.mood]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "avatar": self.avatar,
            "mood": self.mood.value,
            "energy": self.energy,
            "last_interaction": self.last_interaction.isoformat(),
            "personality": dict(self.personality),
            "animation": self.animation.value,
            "is_speaking": self.is_speaking,
            "spoken_line": self.spoken_line,
        }
