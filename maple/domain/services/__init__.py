"""
Domain Services
ビジネスロジックサービス
"""

from .chat import ChatSession
from .identity import IdentityService
from .interaction import INTERACTION_EFFECTS, InteractionEffect, InteractionEngine
from .response import KeywordGroup, ResponseGenerator

__all__ = [
    "InteractionEngine",
    "InteractionEffect",
    "INTERACTION_EFFECTS",
    "ResponseGenerator",
    "KeywordGroup",
    "ChatSession",
    "IdentityService",
]
