from .scheduled import ScheduledSpeechOutput

__all__ = ["ScheduledSpeechOutput"]
