"""
Maple - ローカルで動く AI コンパニオンのコア

- 気分・エネルギー・性格のコンパニオン状態
- インタラクションによる状態遷移とアニメーション/発話
- キーワードによる定型応答のチャット
- 単一スレッドのイベントループ上の遅延通知
"""

from importlib.metadata import version as _dist_version
from pathlib import Path
import tomllib

_pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
if _pyproject.exists():
    with _pyproject.open("rb") as _f:
        __version__: str = tomllib.load(_f)["project"]["version"]
else:
    __version__ = _dist_version("maple-companion")

# ===== Domain Models =====
from .domain.models import (
    AnimationCue,
    ChatLog,
    CompanionAction,
    CompanionMood,
    CompanionSnapshot,
    CompanionState,
    Message,
    MessageType,
    PersonalityTraits,
    Sender,
)

# ===== Ports (Interfaces) =====
from .domain.ports import (
    IScheduler,
    ISpeechOutput,
    ScheduledHandle,
)

# ===== Domain Services =====
from .domain.services import (
    ChatSession,
    IdentityService,
    InteractionEngine,
    ResponseGenerator,
)

# ===== Adapters =====
from .adapters.scheduling import AsyncioScheduler, ManualScheduler
from .adapters.speech import ScheduledSpeechOutput

# ===== Container =====
from .core.dependencies import CompanionApp


__all__ = [
    # Version
    "__version__",
    # Domain Models - コンパニオン
    "CompanionMood",
    "CompanionAction",
    "AnimationCue",
    "PersonalityTraits",
    "CompanionState",
    "CompanionSnapshot",
    # Domain Models - 会話（セッション中のみ）
    "Sender",
    "MessageType",
    "Message",
    "ChatLog",
    # Domain Services
    "InteractionEngine",
    "ResponseGenerator",
    "ChatSession",
    "IdentityService",
    # Ports
    "IScheduler",
    "ScheduledHandle",
    "ISpeechOutput",
    # Adapters
    "AsyncioScheduler",
    "ManualScheduler",
    "ScheduledSpeechOutput",
    # Container
    "CompanionApp",
]
