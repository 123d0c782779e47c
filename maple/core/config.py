"""
統合設定管理

pydantic-settings を使用した型安全な設定管理
- 環境変数から自動読み込み
- バリデーション付き
- デフォルト値対応
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.models.companion import CompanionMood
from .exceptions import ConfigurationError


class CompanionSettings(BaseSettings):
    """コンパニオン初期状態の設定"""

    model_config = SettingsConfigDict(env_prefix="MAPLE_COMPANION_")

    name: str = Field(default="Maple", description="コンパニオン名")
    avatar: str = Field(default="robot", description="選択中のアバター")

    initial_mood: str = Field(default="happy", description="起動時の気分")
    initial_energy: int = Field(default=85, ge=0, le=100, description="起動時のエネルギー (0-100)")

    # 性格特性 (0.0-1.0)
    friendliness: float = Field(default=0.9, ge=0.0, le=1.0, description="親しみやすさ")
    helpfulness: float = Field(default=0.85, ge=0.0, le=1.0, description="手助けへの意欲")
    humor: float = Field(default=0.7, ge=0.0, le=1.0, description="ユーモア")
    empathy: float = Field(default=0.95, ge=0.0, le=1.0, description="共感力")

    @field_validator("initial_mood")
    @classmethod
    def validate_mood(cls, v: str) -> str:
        """気分は列挙値のいずれか"""
        v = v.strip().lower()
        CompanionMood(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("コンパニオン名は必須です")
        return v.strip()


class TimingSettings(BaseSettings):
    """遅延（秒）の設定"""

    model_config = SettingsConfigDict(env_prefix="MAPLE_TIMING_")

    animation_reset_delay: float = Field(default=2.0, ge=0.0, description="アニメーションを idle に戻すまでの遅延")
    speech_delay: float = Field(default=2.0, ge=0.0, description="音声合成スタブの完了までの遅延")
    reply_delay_min: float = Field(default=1.0, ge=0.0, description="返信の最小「考え中」時間")
    reply_delay_max: float = Field(default=2.5, ge=0.0, description="返信の最大「考え中」時間")
    login_delay: float = Field(default=0.5, ge=0.0, description="モックログインの遅延")

    # 元の挙動ではアニメーションのリセットは取り消されない
    cancel_superseded_resets: bool = Field(
        default=False,
        description="新しいインタラクションで保留中のリセットを取り消す",
    )

    @model_validator(mode="after")
    def validate_reply_bounds(self) -> "TimingSettings":
        if self.reply_delay_max < self.reply_delay_min:
            raise ValueError("reply_delay_max は reply_delay_min 以上である必要があります")
        return self


class MapleSettings(BaseSettings):
    """Maple 全体設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, alias="MAPLE_DEBUG", description="デバッグモード")
    log_level: str = Field(default="WARNING", alias="MAPLE_LOG_LEVEL", description="ログレベル")
    random_seed: Optional[int] = Field(default=None, alias="MAPLE_RANDOM_SEED", description="乱数シード（再現用）")

    # サブ設定
    companion: CompanionSettings = Field(default_factory=CompanionSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"不明なログレベル: {v}")
        return v

    @property
    def effective_log_level(self) -> str:
        """debug 有効時は DEBUG を優先"""
        return "DEBUG" if self.debug else self.log_level

    @classmethod
    def load(cls) -> "MapleSettings":
        """設定をロード（サブ設定も含む）"""
        try:
            return cls(
                companion=CompanionSettings(),
                timing=TimingSettings(),
            )
        except PydanticValidationError as e:
            raise ConfigurationError(
                "設定の読み込みに失敗しました",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


@lru_cache()
def get_settings() -> MapleSettings:
    """
    設定を取得（キャッシュ付き）

    使用例:
        settings = get_settings()
        print(settings.timing.animation_reset_delay)
        print(settings.companion.name)
    """
    return MapleSettings.load()


def reload_settings() -> MapleSettings:
    """設定を再読み込み"""
    get_settings.cache_clear()
    return get_settings()
