import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from gameframe.core.database.connection import SessionLocal
from gameframe.core.shared_types import RecordingWindow
from .sql_models import KeyMomentModel, TranscriptModel
from ..domain.interfaces import IKeyMomentRepository, ITranscriptRepository
from ..domain.models import KeyMomentRecord, TranscriptRecord, PersistenceError

logger = logging.getLogger(__name__)


def _to_key_moment_record(row: KeyMomentModel) -> KeyMomentRecord:
    return KeyMomentRecord(
        id=row.id,
        game_id=row.game_id,
        uploaded_by=row.uploaded_by,
        audio_path=row.audio_path,
        window=RecordingWindow(start=row.frame_start, end=row.frame_end),
        feedback_for=list(row.feedback_for or []),
        team_id=row.team_id
    )


def _to_transcript_record(row: TranscriptModel) -> TranscriptRecord:
    return TranscriptRecord(
        id=row.id,
        key_moment_id=row.key_moment_id,
        text=row.transcript,
        language=row.language,
        confidence=row.confidence,
        generated_by=row.generated_by,
        game_id=row.game_id
    )


class SqlKeyMomentRepo(IKeyMomentRepository):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_key_moment(self,
                          game_id: str,
                          uploaded_by: str,
                          audio_path: Optional[str],
                          window: RecordingWindow,
                          feedback_for: List[str],
                          team_id: Optional[str] = None) -> Optional[str]:
        with self.session_factory() as db:
            try:
                row = KeyMomentModel(
                    team_id=team_id,
                    game_id=game_id,
                    uploaded_by=uploaded_by,
                    audio_path=audio_path,
                    frame_start=window.start,
                    frame_end=window.end,
                    feedback_for=list(feedback_for)
                )
                db.add(row)
                db.commit()
                return row.id
            except SQLAlchemyError as e:
                db.rollback()
                raise PersistenceError(f"Could not create key moment for game {game_id}: {e}") from e

    def delete_key_moment(self, key_moment_id: str) -> bool:
        with self.session_factory() as db:
            try:
                row = db.get(KeyMomentModel, key_moment_id)
                if not row:
                    return False
                db.delete(row)
                db.commit()
                return True
            except SQLAlchemyError as e:
                db.rollback()
                raise PersistenceError(f"Could not delete key moment {key_moment_id}: {e}") from e

    def get_key_moment(self, key_moment_id: str) -> Optional[KeyMomentRecord]:
        with self.session_factory() as db:
            row = db.get(KeyMomentModel, key_moment_id)
            return _to_key_moment_record(row) if row else None

    def list_for_game(self, game_id: str) -> List[KeyMomentRecord]:
        """Key moments of one game, in recording order."""
        with self.session_factory() as db:
            rows = (
                db.query(KeyMomentModel)
                .filter(KeyMomentModel.game_id == game_id)
                .order_by(KeyMomentModel.frame_start, KeyMomentModel.created_at)
                .all()
            )
            return [_to_key_moment_record(r) for r in rows]


class SqlTranscriptRepo(ITranscriptRepository):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_transcript(self,
                          key_moment_id: str,
                          text: str,
                          language: str,
                          confidence: int,
                          generated_by: Optional[str] = None,
                          game_id: Optional[str] = None) -> Optional[str]:
        with self.session_factory() as db:
            try:
                # SQLite does not enforce the foreign key unless asked to, so check here
                if db.get(KeyMomentModel, key_moment_id) is None:
                    raise PersistenceError(f"Key moment {key_moment_id} does not exist.")

                row = TranscriptModel(
                    key_moment_id=key_moment_id,
                    transcript=text,
                    language=language,
                    generated_by=generated_by,
                    confidence=confidence,
                    game_id=game_id
                )
                db.add(row)
                db.commit()
                return row.id
            except SQLAlchemyError as e:
                db.rollback()
                raise PersistenceError(f"Could not create transcript for key moment {key_moment_id}: {e}") from e

    def get_for_key_moment(self, key_moment_id: str) -> Optional[TranscriptRecord]:
        with self.session_factory() as db:
            row = (
                db.query(TranscriptModel)
                .filter(TranscriptModel.key_moment_id == key_moment_id)
                .order_by(TranscriptModel.created_at)
                .first()
            )
            return _to_transcript_record(row) if row else None
