# File: gameframe/features/key_moments/domain/models.py
from dataclasses import dataclass, field
from typing import List, Optional
from gameframe.core.common.enums import PipelineStage
from gameframe.core.shared_types import RecordingWindow

@dataclass(frozen=True)
class KeyMomentRecord:
    """
    Durable record of a clip's time window and who the feedback is for.
    """
    id: str
    game_id: str
    uploaded_by: str
    audio_path: Optional[str]
    window: RecordingWindow
    feedback_for: List[str] = field(default_factory=list)
    team_id: Optional[str] = None

@dataclass(frozen=True)
class TranscriptRecord:
    """
    Durable record of the recognized text. Always points at an existing key moment.
    """
    id: str
    key_moment_id: str
    text: str
    language: str
    confidence: int
    generated_by: Optional[str] = None
    game_id: Optional[str] = None

    def __post_init__(self):
        if not 1 <= self.confidence <= 5:
            raise ValueError(f"Confidence must be between 1 and 5, got {self.confidence}.")

@dataclass(frozen=True)
class KeyMomentWrite:
    """Ids produced by a completed key moment + transcript write."""
    key_moment_id: str
    transcript_id: str


class PersistenceError(RuntimeError):
    """Raised when the record store rejects or loses a write."""


class KeyMomentWriteError(PersistenceError):
    """
    A two-step write stopped part way.
    key_moment_id is set when the first step succeeded; compensated tells
    whether that key moment was deleted again.
    """
    def __init__(self, message: str, stage: PipelineStage,
                 key_moment_id: Optional[str] = None, compensated: bool = False):
        super().__init__(message)
        self.stage = stage
        self.key_moment_id = key_moment_id
        self.compensated = compensated
