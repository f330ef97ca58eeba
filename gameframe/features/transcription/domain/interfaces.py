from abc import ABC, abstractmethod
from pathlib import Path
from .models import TranscriptionResult

class ITranscriber(ABC):
    """
    Contract for any ASR (Automatic Speech Recognition) engine.
    Allows us to swap Whisper for an on-device or API-based recognizer.
    """
    @abstractmethod
    def transcribe(self, audio_path: Path) -> TranscriptionResult:
        """
        Transcribes the audio clip at the given path.

        Args:
            audio_path: Absolute path to the clip.

        Returns:
            TranscriptionResult, possibly with empty text.
        """
        pass
