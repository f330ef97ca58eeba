# File: gameframe/features/transcription/domain/models.py
from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass(frozen=True)
class TranscriptionResult:
    """
    The output of the ASR engine for one clip.
    Empty text is a valid "no speech detected" result.
    """
    text: str = ""
    language: str = "unknown"
    model_used: str = ""
    processing_meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
