"""共通フィクスチャ"""

import os
from datetime import datetime

import pytest

from maple.adapters.scheduling import ManualScheduler
from maple.core.config import get_settings

START = datetime(2024, 10, 1, 9, 0, 0)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """環境変数由来の設定を毎テストでリセット"""
    for key in list(os.environ):
        if key.startswith("MAPLE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def scheduler():
    return ManualScheduler(start=START)
