# File: gameframe/features/transcription/data/whisper_adapter.py
import whisper
import logging
from pathlib import Path
from typing import Optional
from gameframe.core.config.settings import settings
from gameframe.core.model_lifecycle.orchestrator import ModelOrchestrator, ModelType
from ..domain.interfaces import ITranscriber
from ..domain.models import TranscriptionResult

logger = logging.getLogger(__name__)

class WhisperAdapter(ITranscriber):
    def __init__(self, model_size: Optional[str] = None):
        self.orchestrator = ModelOrchestrator()
        self.device = settings.WHISPER_DEVICE
        self.model_size = model_size or settings.WHISPER_MODEL_NAME

    def transcribe(self, audio_path: Path) -> TranscriptionResult:
        logger.info(f"Requesting Whisper ({self.model_size}) for {audio_path}...")

        def loader():
            logger.debug(f"Loading Whisper {self.model_size} on {self.device}...")
            return whisper.load_model(self.model_size, device=self.device)

        model = self.orchestrator.request_model(ModelType.WHISPER, self.model_size, loader)
        use_fp16 = (self.device == "cuda")

        result_raw = model.transcribe(str(audio_path), fp16=use_fp16)

        return TranscriptionResult(
            text=(result_raw.get('text') or '').strip(),
            language=result_raw.get('language', 'unknown'),
            model_used=self.model_size,
            processing_meta={
                "device": self.device,
                "segment_count": len(result_raw.get('segments', []))
            }
        )
