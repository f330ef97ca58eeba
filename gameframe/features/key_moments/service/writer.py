import logging
from typing import List, Optional
from gameframe.core.common.enums import OrphanPolicy, PipelineStage
from gameframe.core.config.settings import settings
from gameframe.core.shared_types import RecordingWindow
from ..domain.interfaces import IKeyMomentRepository, ITranscriptRepository
from ..domain.models import KeyMomentWrite, KeyMomentWriteError

logger = logging.getLogger(__name__)


class KeyMomentWriter:
    """
    Writes a key moment and then its transcript, as two separate store calls.

    The transcript is only attempted once the key moment returned an id, so a
    transcript never points at nothing. Nothing is retried. What happens to a
    key moment whose transcript failed is decided by the orphan policy:
    - KEEP: leave it in the store and report its id.
    - COMPENSATE: delete it again (best effort).
    """

    def __init__(self,
                 key_moments: IKeyMomentRepository,
                 transcripts: ITranscriptRepository,
                 orphan_policy: Optional[OrphanPolicy] = None):
        self.key_moments = key_moments
        self.transcripts = transcripts
        self.orphan_policy = orphan_policy or OrphanPolicy(settings.ORPHAN_POLICY)

    def write(self,
              game_id: str,
              uploaded_by: str,
              audio_path: Optional[str],
              window: RecordingWindow,
              feedback_for: List[str],
              text: str,
              language: str,
              confidence: int,
              team_id: Optional[str] = None) -> KeyMomentWrite:
        # 1. Key Moment
        try:
            key_moment_id = self.key_moments.create_key_moment(
                game_id=game_id,
                uploaded_by=uploaded_by,
                audio_path=audio_path,
                window=window,
                feedback_for=feedback_for,
                team_id=team_id
            )
        except Exception as e:
            logger.error(f"Key moment write failed for game {game_id}: {e}")
            raise KeyMomentWriteError(str(e), PipelineStage.PERSISTING_KEY_MOMENT) from e

        if not key_moment_id:
            logger.error(f"Key moment write for game {game_id} returned no id. Aborting.")
            raise KeyMomentWriteError("The key moment id is empty.", PipelineStage.PERSISTING_KEY_MOMENT)

        # 2. Transcript
        try:
            transcript_id = self.transcripts.create_transcript(
                key_moment_id=key_moment_id,
                text=text,
                language=language,
                confidence=confidence,
                generated_by=uploaded_by,
                game_id=game_id
            )
            if not transcript_id:
                raise KeyMomentWriteError("The transcript id is empty.", PipelineStage.PERSISTING_TRANSCRIPT,
                                          key_moment_id=key_moment_id)
        except Exception as e:
            logger.error(f"Transcript write failed for key moment {key_moment_id}: {e}")
            compensated = self._handle_orphan(key_moment_id)
            raise KeyMomentWriteError(str(e), PipelineStage.PERSISTING_TRANSCRIPT,
                                      key_moment_id=key_moment_id, compensated=compensated) from e

        logger.info(f"Stored key moment {key_moment_id} with transcript {transcript_id}")
        return KeyMomentWrite(key_moment_id=key_moment_id, transcript_id=transcript_id)

    def _handle_orphan(self, key_moment_id: str) -> bool:
        if self.orphan_policy == OrphanPolicy.KEEP:
            logger.warning(f"Key moment {key_moment_id} left without a transcript")
            return False

        try:
            deleted = self.key_moments.delete_key_moment(key_moment_id)
        except Exception as e:
            logger.error(f"Compensating delete of key moment {key_moment_id} failed: {e}")
            return False

        if deleted:
            logger.info(f"Compensating delete removed key moment {key_moment_id}")
        return deleted
