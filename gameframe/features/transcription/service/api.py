from pathlib import Path
from typing import Optional
from ..data.whisper_adapter import WhisperAdapter
from ..domain.models import TranscriptionResult

def run_transcription(audio_path: str, model_size: Optional[str] = None) -> TranscriptionResult:
    """
    Standalone API for running transcription directly.
    Useful for testing or CLI tools without the ingestion pipeline.
    """
    adapter = WhisperAdapter(model_size)
    return adapter.transcribe(Path(audio_path))
