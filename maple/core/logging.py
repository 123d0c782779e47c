"""
統一ログシステム
構造化ログによる一貫したログ出力
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from .exceptions import MapleException


# LogRecord の標準属性（extra として出力しない）
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
])


class StructuredFormatter(logging.Formatter):
    """構造化ログフォーマッター"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        # モジュール情報
        log_entry["file"] = record.filename
        log_entry["line"] = record.lineno
        log_entry["function"] = record.funcName

        # カスタム属性の追加
        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        # 例外情報
        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None
            }

            # MapleExceptionの場合は追加情報を含める
            if isinstance(record.exc_info[1], MapleException):
                log_entry["exception"]["error_code"] = record.exc_info[1].error_code
                log_entry["exception"]["details"] = record.exc_info[1].details

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class MapleLogger:
    """統一ログシステム"""

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def configure(cls, log_level: str = "INFO", stream=None):
        """ログシステムを設定"""
        if cls._configured:
            return

        root_logger = logging.getLogger("maple")
        root_logger.setLevel(getattr(logging, log_level.upper()))

        # コンソールハンドラー（stderr: CLI の出力と混ざらないように）
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(console_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """ログインスタンスを取得"""
        if name not in cls._loggers:
            logger_name = f"maple.{name}" if not name.startswith("maple") else name
            cls._loggers[name] = logging.getLogger(logger_name)

        return cls._loggers[name]


# 便利関数群
def get_logger(name: str) -> logging.Logger:
    """ロガーを取得"""
    return MapleLogger.get_logger(name)


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None):
    """エラーログ"""
    extra_info = {"event_type": "error"}
    if context:
        extra_info.update(context)

    logger.error(f"Error occurred: {str(error)}", exc_info=error, extra=extra_info)


def log_business_event(logger: logging.Logger, event: str, user_id: Optional[str] = None,
                       **kwargs):
    """ビジネスイベントログ"""
    extra_info = {
        "event_type": "business_event",
        "business_event": event
    }
    if user_id:
        extra_info["user_id"] = user_id
    extra_info.update(kwargs)

    logger.info(f"Business event: {event}", extra=extra_info)
