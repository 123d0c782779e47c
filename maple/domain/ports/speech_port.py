"""
音声出力ポート
TTS バックエンドへのアクセスを抽象化
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class ISpeechOutput(ABC):
    """
    音声出力インターフェース

    コアが要求するのは「completion が必ずいつか呼ばれる」ことだけ。
    """

    @abstractmethod
    def synthesize(self, text: str, completion: Callable[[bool], None]) -> None:
        """
        テキストを読み上げる

        Args:
            text: 読み上げるテキスト
            completion: 完了時のコールバック（成功したか）
        """
