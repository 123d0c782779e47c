"""
カスタム例外クラス
階層的な例外処理によるエラーハンドリングの統一

コア状態遷移そのものは失敗しない（入力はすべて閉じた列挙・クランプ済み数値）。
例外は設定・入力境界・スケジューラの利用誤りでのみ発生する。
"""

from typing import Any


class MapleException(Exception):
    """Mapleアプリケーションのベース例外クラス"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(MapleException):
    """設定関連のエラー"""


class ValidationError(MapleException):
    """バリデーションエラー"""

    def __init__(self, message: str, field: str | None = None,
                 value: Any | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = value


class AuthenticationError(MapleException):
    """認証（モック）関連のエラー"""

    def __init__(self, message: str, email: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if email is not None:
            self.details['email'] = email


class SchedulerError(MapleException):
    """スケジューラ関連のエラー"""

    def __init__(self, message: str, delay: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if delay is not None:
            self.details['delay'] = delay
