"""Tests for Maple CLI"""

from typer.testing import CliRunner

from maple import __version__
from maple.cli import app

runner = CliRunner()


class TestCli:
    """CLI コマンド tests"""

    def test_version(self):
        """バージョンを表示する"""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_status(self):
        """初期状態を表示する"""
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "Maple" in result.output
        assert "85%" in result.output

    def test_simulate(self):
        """仮想時計で再生し、最後は idle に戻る"""
        result = runner.invoke(app, ["simulate", "play", "rest", "--gap", "0.5"])
        assert result.exit_code == 0
        assert "jump" in result.output
        assert "sleeping" in result.output
        assert "idle" in result.output

    def test_unknown_action(self):
        """不明なアクションは終了コード 1"""
        result = runner.invoke(app, ["simulate", "dance"])
        assert result.exit_code == 1
        assert "dance" in result.output

    def test_invalid_settings(self, monkeypatch):
        """不正な設定は終了コード 1"""
        monkeypatch.setenv("MAPLE_COMPANION_INITIAL_ENERGY", "500")
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1

    def test_interact_on_event_loop(self, monkeypatch):
        """イベントループ上で遅延効果が完了するまで待つ"""
        monkeypatch.setenv("MAPLE_TIMING_ANIMATION_RESET_DELAY", "0.01")
        monkeypatch.setenv("MAPLE_TIMING_SPEECH_DELAY", "0.01")
        result = runner.invoke(app, ["interact", "feed"])
        assert result.exit_code == 0
        assert "100%" in result.output

    def test_chat(self, monkeypatch):
        """返信を待って会話ログを表示する"""
        monkeypatch.setenv("MAPLE_TIMING_REPLY_DELAY_MIN", "0.0")
        monkeypatch.setenv("MAPLE_TIMING_REPLY_DELAY_MAX", "0.01")
        result = runner.invoke(app, ["chat", "hello"])
        assert result.exit_code == 0
        assert "you" in result.output
        assert "hello" in result.output
