# File: gameframe/features/ingestion/service/controller.py
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from gameframe.core.common.enums import PipelineStage, PipelineStatus
from gameframe.core.config.settings import settings
from gameframe.core.shared_types import RecordingWindow, MediaFile
from gameframe.features.attribution.service.matcher import SpeakerAttributionMatcher
from gameframe.features.key_moments.domain.models import KeyMomentWriteError
from gameframe.features.key_moments.service.writer import KeyMomentWriter
from gameframe.features.session.domain.interfaces import ISessionContextProvider
from gameframe.features.session.domain.models import GameSession
from gameframe.features.storage.data.local_fs import LocalClipInbox
from gameframe.features.storage.domain.interfaces import IAudioStorage, IClipInbox
from gameframe.features.storage.domain.models import IngestedClip
from gameframe.features.transcription.domain.interfaces import ITranscriber
from ..domain.models import ClipTransfer, TranscriptMessage, PipelineOutcome

logger = logging.getLogger(__name__)


class RecordingIngestionController:
    """
    Drives one received clip from the transport to the session cache.

    Received -> (Transcribing) -> Matching -> Persisting key moment
    -> Persisting transcript -> Cached, or Failed at any step.

    Runs are independent: each call handles exactly one clip and may run on
    its own thread. The only shared state touched is the session's cache,
    which serializes its own appends.
    """

    def __init__(self,
                 session_provider: ISessionContextProvider,
                 transcriber: ITranscriber,
                 writer: KeyMomentWriter,
                 audio_storage: Optional[IAudioStorage] = None,
                 clip_inbox: Optional[IClipInbox] = None,
                 matcher: Optional[SpeakerAttributionMatcher] = None,
                 language: Optional[str] = None,
                 confidence: Optional[int] = None):
        self.session_provider = session_provider
        self.transcriber = transcriber
        self.writer = writer
        self.audio_storage = audio_storage
        self.clip_inbox = clip_inbox or LocalClipInbox()
        self.matcher = matcher or SpeakerAttributionMatcher()
        self.language = language or settings.TRANSCRIPT_LANGUAGE
        self.confidence = confidence if confidence is not None else settings.TRANSCRIPT_CONFIDENCE
        if not 1 <= self.confidence <= 5:
            raise ValueError(f"Confidence must be between 1 and 5, got {self.confidence}.")

    # --- Transport entry points ---

    def on_file_received(self, file_path: Path, metadata: Optional[Dict[str, Any]] = None) -> PipelineOutcome:
        try:
            transfer = ClipTransfer.from_transport(file_path, metadata)
        except ValueError as e:
            logger.error(f"Rejected clip {Path(file_path).name}: {e}")
            return PipelineOutcome(status=PipelineStatus.FAILED, stage=PipelineStage.RECEIVED, error=str(e))
        return self.handle_file_transfer(transfer)

    def on_message_received(self, message: Dict[str, Any]) -> Optional[PipelineOutcome]:
        """Returns None when the message is not a usable recording."""
        try:
            recording = TranscriptMessage.from_transport(message)
        except ValueError as e:
            logger.warning(f"Ignoring transcript message: {e}")
            return None
        if recording is None:
            logger.warning(f"Message is missing recording_start_time, recording_end_time or test_transcript: {sorted(message)}")
            return None
        return self.handle_message(recording)

    # --- Pipelines ---

    def handle_file_transfer(self, transfer: ClipTransfer) -> PipelineOutcome:
        session = self.session_provider.current_game_session()
        if session is None:
            logger.warning(f"No current game context available. Dropping clip {transfer.file_path.name}.")
            return PipelineOutcome(status=PipelineStatus.SKIPPED, stage=PipelineStage.RECEIVED)

        logger.info(f"Received clip from companion: {transfer.file_path.name}")

        clip = self._accept_clip(transfer)
        if clip is None:
            return PipelineOutcome(status=PipelineStatus.FAILED, stage=PipelineStage.RECEIVED,
                                   error=f"Clip {transfer.file_path} could not be loaded.")

        try:
            # 1. Transcribe
            try:
                result = self.transcriber.transcribe(clip.audio_ref.path)
            except Exception as e:
                logger.error(f"Transcription failed for {clip.audio_ref.path.name}: {e}")
                return PipelineOutcome(status=PipelineStatus.FAILED, stage=PipelineStage.TRANSCRIBING, error=str(e))

            if result.is_empty:
                logger.info("Transcription complete: no speech detected")
            else:
                logger.info(f"Transcription complete: {result.text}")

            # 2. Upload the audio
            audio_path = self._upload_audio(clip, session)

            return self._attribute_and_store(session, result.text, clip.metadata, audio_path)
        finally:
            self._release_clip(clip)

    def handle_message(self, message: TranscriptMessage) -> PipelineOutcome:
        session = self.session_provider.current_game_session()
        if session is None:
            logger.warning("No current game context available. Dropping transcript message.")
            return PipelineOutcome(status=PipelineStatus.SKIPPED, stage=PipelineStage.RECEIVED)

        logger.info(f"Received transcript message from companion: {message.text!r}")
        return self._attribute_and_store(session, message.text, message.window, audio_path=None)

    def _attribute_and_store(self,
                             session: GameSession,
                             text: str,
                             window: RecordingWindow,
                             audio_path: Optional[str]) -> PipelineOutcome:
        roster = list(session.roster)

        # 3. Match
        attribution = self.matcher.attribute(text, roster)
        targets = attribution.resolve_targets(roster)
        feedback_for = [member.player_id for member in targets]

        # 4. Persist (key moment, then transcript)
        try:
            written = self.writer.write(
                game_id=session.game_id,
                uploaded_by=session.uploaded_by,
                audio_path=audio_path,
                window=window,
                feedback_for=feedback_for,
                text=text,
                language=self.language,
                confidence=self.confidence,
                team_id=session.team_id
            )
        except KeyMomentWriteError as e:
            return PipelineOutcome(status=PipelineStatus.FAILED, stage=e.stage, attribution=attribution,
                                   key_moment_id=e.key_moment_id, error=str(e))

        # 5. Show it live
        entry = session.recordings.add(
            key_moment_id=written.key_moment_id,
            transcript_id=written.transcript_id,
            text=text,
            window=window,
            feedback_for=targets
        )

        return PipelineOutcome(status=PipelineStatus.CACHED, stage=PipelineStage.CACHED, entry=entry,
                               attribution=attribution, key_moment_id=written.key_moment_id,
                               transcript_id=written.transcript_id)

    # --- Local files ---

    def _accept_clip(self, transfer: ClipTransfer) -> Optional[IngestedClip]:
        try:
            local_path = self.clip_inbox.accept(transfer.file_path)
        except OSError as e:
            logger.error(f"Failed to move clip {transfer.file_path}: {e}")
            if not transfer.file_path.exists():
                return None
            # Work from the transport's copy; it stays the transport's to delete
            return IngestedClip(audio_ref=MediaFile(transfer.file_path), metadata=transfer.window,
                                source_path=str(transfer.file_path))

        return IngestedClip(audio_ref=MediaFile(local_path), metadata=transfer.window,
                            source_path=str(transfer.file_path))

    def _release_clip(self, clip: IngestedClip) -> None:
        if str(clip.audio_ref.path) == clip.source_path:
            return
        try:
            self.clip_inbox.release(clip.audio_ref.path)
        except OSError as e:
            logger.error(f"Failed to delete clip {clip.audio_ref.path}: {e}")

    def _upload_audio(self, clip: IngestedClip, session: GameSession) -> Optional[str]:
        """Returns the remote path, or None when there is nowhere to upload or the upload failed."""
        if self.audio_storage is None:
            return None

        suffix = clip.audio_ref.path.suffix or ".m4a"
        remote_path = f"audio/{session.team_id}/{session.game_id}/{uuid.uuid4()}{suffix}"
        try:
            url = self.audio_storage.upload_audio(clip.audio_ref.path, remote_path)
        except Exception as e:
            logger.error(f"Error uploading audio: {e}")
            return None

        logger.info(f"Audio uploaded: {url}")
        return remote_path
