from abc import ABC, abstractmethod
from typing import List, Optional
from gameframe.core.shared_types import RecordingWindow
from .models import KeyMomentRecord, TranscriptRecord

class IKeyMomentRepository(ABC):
    """
    Contract for key moment persistence.
    The backing store offers no transaction spanning key moments and transcripts.
    """

    @abstractmethod
    def create_key_moment(self,
                          game_id: str,
                          uploaded_by: str,
                          audio_path: Optional[str],
                          window: RecordingWindow,
                          feedback_for: List[str],
                          team_id: Optional[str] = None) -> Optional[str]:
        """
        Creates a key moment and returns its id.
        May return None when the store did not hand back an id.
        """
        pass

    @abstractmethod
    def delete_key_moment(self, key_moment_id: str) -> bool:
        """Deletes a key moment. Returns True if it existed."""
        pass

class ITranscriptRepository(ABC):

    @abstractmethod
    def create_transcript(self,
                          key_moment_id: str,
                          text: str,
                          language: str,
                          confidence: int,
                          generated_by: Optional[str] = None,
                          game_id: Optional[str] = None) -> Optional[str]:
        """
        Creates a transcript linked to an existing key moment and returns its id.
        """
        pass
