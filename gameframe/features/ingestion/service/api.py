from typing import Optional
from gameframe.core.config.settings import settings
from gameframe.core.database.base import Base
from gameframe.core.database.connection import engine
from gameframe.features.key_moments.data.repository import SqlKeyMomentRepo, SqlTranscriptRepo
from gameframe.features.key_moments.service.writer import KeyMomentWriter
from gameframe.features.session.domain.interfaces import ISessionContextProvider
from gameframe.features.storage.data.local_fs import LocalAudioStorage, LocalClipInbox
from gameframe.features.transcription.domain.interfaces import ITranscriber
from .controller import RecordingIngestionController

def build_ingestion_controller(session_provider: ISessionContextProvider,
                               transcriber: Optional[ITranscriber] = None) -> RecordingIngestionController:
    """
    Wires the controller to the local database, the artifacts folder and Whisper.
    Creates missing tables and data directories.
    """
    settings.ensure_dirs()
    Base.metadata.create_all(bind=engine)

    if transcriber is None:
        from gameframe.features.transcription.data.whisper_adapter import WhisperAdapter
        transcriber = WhisperAdapter()

    writer = KeyMomentWriter(SqlKeyMomentRepo(), SqlTranscriptRepo())

    return RecordingIngestionController(
        session_provider=session_provider,
        transcriber=transcriber,
        writer=writer,
        audio_storage=LocalAudioStorage(),
        clip_inbox=LocalClipInbox()
    )
