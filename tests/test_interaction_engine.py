"""
InteractionEngine のテスト

- アクションごとの気分・エネルギー・アニメーション
- エネルギーの飽和
- アニメーションリセットの後勝ち（取り消さない）挙動
- 発話の完了通知
"""

from collections.abc import Callable

import pytest

from maple.adapters.scheduling import ManualScheduler
from maple.adapters.speech import ScheduledSpeechOutput
from maple.core.exceptions import ValidationError
from maple.domain.models.companion import (
    AnimationCue,
    CompanionAction,
    CompanionMood,
    CompanionState,
)
from maple.domain.ports.speech_port import ISpeechOutput
from maple.domain.services.interaction import INTERACTION_EFFECTS, InteractionEngine


# === モッククラス ===


class MockSpeechOutput(ISpeechOutput):
    """テスト用音声出力モック（完了はテストから手動で通知）"""

    def __init__(self):
        self.spoken: list[str] = []
        self.completions: list[Callable[[bool], None]] = []

    def synthesize(self, text: str, completion: Callable[[bool], None]) -> None:
        self.spoken.append(text)
        self.completions.append(completion)


def make_engine(scheduler, **kwargs) -> InteractionEngine:
    return InteractionEngine(
        scheduler=scheduler,
        speech=ScheduledSpeechOutput(scheduler, delay=2.0),
        **kwargs,
    )


# === 状態遷移テスト ===


class TestInteractionTable:
    """アクション表のテスト"""

    @pytest.mark.parametrize(
        "action,expected_mood,expected_energy,expected_cue",
        [
            (CompanionAction.PLAY, CompanionMood.EXCITED, 75, AnimationCue.JUMP),
            (CompanionAction.FEED, CompanionMood.HAPPY, 100, AnimationCue.HAPPY),
            (CompanionAction.CHAT, CompanionMood.THOUGHTFUL, 85, AnimationCue.TALKING),
            (CompanionAction.REST, CompanionMood.SLEEPY, 100, AnimationCue.SLEEPING),
        ],
    )
    def test_action_effects(self, scheduler, action, expected_mood, expected_energy, expected_cue):
        """各アクションが表どおりに状態を更新する"""
        engine = make_engine(scheduler)

        engine.interact(action)

        assert engine.state.mood == expected_mood
        assert engine.state.energy == expected_energy
        assert engine.animation == expected_cue
        assert 0 <= engine.state.energy <= 100

    @pytest.mark.parametrize("action", list(CompanionAction))
    def test_energy_stays_in_range_from_any_start(self, scheduler, action):
        """どの初期値からでもエネルギーは範囲内"""
        for start in (0, 5, 50, 95, 100):
            engine = make_engine(scheduler, state=CompanionState(energy=start))
            engine.interact(action)
            assert 0 <= engine.state.energy <= 100

    def test_string_action_accepted(self, scheduler):
        """文字列のアクションも受け付ける"""
        engine = make_engine(scheduler)
        engine.interact("rest")
        assert engine.state.mood == CompanionMood.SLEEPY

    def test_unknown_action_rejected(self, scheduler):
        """未知のアクションは列挙値の変換で失敗する"""
        engine = make_engine(scheduler)
        with pytest.raises(ValueError):
            engine.interact("dance")

    def test_repeated_feed_saturates(self, scheduler):
        """feed を繰り返しても 100 を超えない"""
        engine = make_engine(scheduler, state=CompanionState(energy=10))
        for _ in range(10):
            engine.interact(CompanionAction.FEED)
            assert engine.state.energy <= 100
        assert engine.state.energy == 100

    def test_repeated_play_floors(self, scheduler):
        """play を繰り返しても 0 を下回らない"""
        engine = make_engine(scheduler)
        for _ in range(20):
            engine.interact(CompanionAction.PLAY)
            assert engine.state.energy >= 0
        assert engine.state.energy == 0

    def test_any_mood_can_follow_any_mood(self, scheduler):
        """気分に遷移制約はない"""
        engine = make_engine(scheduler)
        sequence = [
            CompanionAction.REST,
            CompanionAction.PLAY,
            CompanionAction.REST,
            CompanionAction.CHAT,
            CompanionAction.FEED,
            CompanionAction.REST,
        ]
        for action in sequence:
            engine.interact(action)
            assert engine.state.mood == INTERACTION_EFFECTS[action].mood

    def test_last_interaction_non_decreasing(self, scheduler):
        """last_interaction は呼び出しごとに減少しない"""
        engine = make_engine(scheduler)
        previous = engine.state.last_interaction
        for step in (0.0, 0.1, 0.0, 1.5):
            scheduler.advance(step)
            engine.interact(CompanionAction.CHAT)
            assert engine.state.last_interaction >= previous
            previous = engine.state.last_interaction

        assert previous == scheduler.now()

    def test_last_interaction_uses_scheduler_clock(self, scheduler):
        """last_interaction はスケジューラの時計で記録される"""
        engine = make_engine(scheduler)
        scheduler.advance(3.0)
        engine.interact(CompanionAction.FEED)
        assert engine.state.last_interaction == scheduler.now()


# === アニメーションリセットのテスト ===


class TestAnimationReset:
    """アニメーションリセットのテスト"""

    def test_cue_resets_to_idle_after_delay(self, scheduler):
        """2秒後に idle に戻る"""
        engine = make_engine(scheduler)
        engine.interact(CompanionAction.PLAY)

        scheduler.advance(1.99)
        assert engine.animation == AnimationCue.JUMP

        scheduler.advance(0.01)
        assert engine.animation == AnimationCue.IDLE

    def test_pending_reset_clobbers_newer_cue(self, scheduler):
        """先に予約されたリセットは新しいキューも idle に戻す（取り消さない）"""
        engine = make_engine(scheduler)
        engine.interact(CompanionAction.PLAY)
        scheduler.advance(0.5)
        engine.interact(CompanionAction.REST)
        assert engine.animation == AnimationCue.SLEEPING

        # play のリセット (t=2.0) が rest のキューを上書きする
        scheduler.advance(1.5)
        assert engine.animation == AnimationCue.IDLE

        scheduler.run_until_idle()
        assert engine.animation == AnimationCue.IDLE
        # 気分は最後の変更 (rest) を反映する
        assert engine.state.mood == CompanionMood.SLEEPY

    def test_cancel_superseded_resets_keeps_newer_cue(self, scheduler):
        """cancel_superseded_resets=True なら新しいキューは自分のリセットまで残る"""
        engine = make_engine(scheduler, cancel_superseded_resets=True)
        engine.interact(CompanionAction.PLAY)
        scheduler.advance(0.5)
        engine.interact(CompanionAction.REST)

        scheduler.advance(1.5)
        assert engine.animation == AnimationCue.SLEEPING

        scheduler.advance(0.5)
        assert engine.animation == AnimationCue.IDLE
        assert engine.state.mood == CompanionMood.SLEEPY

    def test_every_reset_fires_without_cancellation(self, scheduler):
        """既定では予約したリセットはすべて発火する"""
        engine = make_engine(scheduler)
        engine.interact(CompanionAction.PLAY)
        engine.interact(CompanionAction.FEED)
        # リセット2件 + 発話完了2件
        assert scheduler.pending_count == 4
        assert scheduler.run_until_idle() == 4


# === 発話のテスト ===


class TestSpeech:
    """発話のテスト"""

    def setup_method(self):
        self.scheduler = ManualScheduler()
        self.speech = MockSpeechOutput()
        self.engine = InteractionEngine(scheduler=self.scheduler, speech=self.speech)

    def test_interaction_speaks_scripted_line(self):
        """アクションごとの定型セリフを話す"""
        for action in CompanionAction:
            self.engine.interact(action)

        assert self.speech.spoken == [INTERACTION_EFFECTS[a].line for a in CompanionAction]
        assert self.engine.is_speaking

    def test_completion_resets_talking_cue(self):
        """発話完了で talking は idle に戻る"""
        self.engine.interact(CompanionAction.CHAT)
        assert self.engine.animation == AnimationCue.TALKING

        self.speech.completions[-1](True)

        assert not self.engine.is_speaking
        assert self.engine.animation == AnimationCue.IDLE

    def test_completion_keeps_other_cues(self):
        """発話完了は talking 以外のキューを変えない"""
        self.engine.interact(CompanionAction.PLAY)

        self.speech.completions[-1](True)

        assert not self.engine.is_speaking
        assert self.engine.animation == AnimationCue.JUMP

    def test_speak_directly(self):
        """speak は状態を変えずに発話だけ行う"""
        mood = self.engine.state.mood
        energy = self.engine.state.energy

        self.engine.speak("Hello from Maple")

        assert self.speech.spoken == ["Hello from Maple"]
        assert self.engine.is_speaking
        assert self.engine.state.mood == mood
        assert self.engine.state.energy == energy
        assert self.engine.animation == AnimationCue.IDLE

    def test_stub_completes_after_delay(self, scheduler):
        """スタブの音声出力は2秒後に完了する"""
        engine = make_engine(scheduler)
        engine.interact(CompanionAction.CHAT)

        scheduler.advance(1.9)
        assert engine.is_speaking

        scheduler.advance(0.1)
        assert not engine.is_speaking
        assert engine.animation == AnimationCue.IDLE


# === 編集操作のテスト ===


class TestEditing:
    """性格・名前・アバター編集のテスト"""

    def test_edit_personality_clamps(self, scheduler):
        """性格特性は 0.0-1.0 にクランプされる"""
        engine = make_engine(scheduler)
        engine.edit_personality(friendliness=1.5, humor=-0.2)

        traits = engine.state.personality
        assert traits.friendliness == 1.0
        assert traits.humor == 0.0
        # 指定しなかった特性は変わらない
        assert traits.helpfulness == 0.85
        assert traits.empathy == 0.95

    def test_edit_personality_does_not_touch_state(self, scheduler):
        """性格編集は気分・エネルギー・最終インタラクションを変えない"""
        engine = make_engine(scheduler)
        before = engine.state.last_interaction
        scheduler.advance(5.0)

        engine.edit_personality(empathy=0.1)

        assert engine.state.mood == CompanionMood.HAPPY
        assert engine.state.energy == 85
        assert engine.state.last_interaction == before

    def test_interactions_do_not_change_personality(self, scheduler):
        """インタラクションは性格を変えない"""
        engine = make_engine(scheduler)
        before = engine.state.personality.to_dict()
        for action in CompanionAction:
            engine.interact(action)
        assert engine.state.personality.to_dict() == before

    def test_rename(self, scheduler):
        """名前を変更できる"""
        engine = make_engine(scheduler)
        engine.rename("  Acorn ")
        assert engine.name == "Acorn"

    def test_rename_empty_raises(self, scheduler):
        """空の名前はエラー"""
        engine = make_engine(scheduler)
        with pytest.raises(ValidationError) as exc_info:
            engine.rename("   ")
        assert exc_info.value.details["field"] == "name"
        assert engine.name == "Maple"

    def test_select_avatar(self, scheduler):
        """アバターを選択できる"""
        engine = make_engine(scheduler)
        engine.select_avatar("robot_green")
        assert engine.avatar == "robot_green"
        assert engine.snapshot().avatar == "robot_green"


# === 変更通知のテスト ===


class TestNotifications:
    """購読のテスト"""

    def test_subscriber_receives_snapshots(self, scheduler):
        """状態変更ごとにスナップショットが届く"""
        engine = make_engine(scheduler)
        received = []
        engine.subscribe(received.append)

        engine.interact(CompanionAction.FEED)

        assert received[0].mood == CompanionMood.HAPPY
        assert received[0].animation == AnimationCue.HAPPY
        assert received[-1].is_speaking
        assert received[-1].spoken_line == INTERACTION_EFFECTS[CompanionAction.FEED].line

        scheduler.run_until_idle()
        assert received[-1].animation == AnimationCue.IDLE
        assert not received[-1].is_speaking

    def test_unsubscribe(self, scheduler):
        """購読解除後は届かない"""
        engine = make_engine(scheduler)
        received = []
        unsubscribe = engine.subscribe(received.append)
        unsubscribe()

        engine.interact(CompanionAction.PLAY)

        assert received == []

    def test_snapshot_is_immutable_copy(self, scheduler):
        """スナップショットは後の変更の影響を受けない"""
        engine = make_engine(scheduler)
        snapshot = engine.snapshot()
        engine.interact(CompanionAction.PLAY)
        engine.edit_personality(humor=0.0)

        assert snapshot.energy == 85
        assert snapshot.mood == CompanionMood.HAPPY
        assert snapshot.personality["humor"] == 0.7
        assert snapshot.to_dict()["animation"] == "idle"

    def test_state_edits_do_not_escape_bounds(self, scheduler):
        """state への範囲外の代入はスナップショットに届かない"""
        engine = make_engine(scheduler)

        engine.state.energy = 250
        engine.state.personality.humor = 3.0

        snapshot = engine.snapshot()
        assert snapshot.energy == 85
        assert snapshot.personality["humor"] == 0.7
