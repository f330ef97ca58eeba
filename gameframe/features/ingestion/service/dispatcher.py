import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Optional
from ..domain.models import PipelineOutcome
from .controller import RecordingIngestionController

logger = logging.getLogger(__name__)

class ClipDispatcher:
    """
    Runs pipelines off the transport's callback thread.
    A slow clip (e.g. a long transcription) does not hold up the ones behind it.
    """

    def __init__(self, controller: RecordingIngestionController, max_workers: int = 2):
        self.controller = controller
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="clip-pipeline")

    def submit_file(self, file_path: Path, metadata: Optional[Dict[str, Any]] = None) -> "Future[PipelineOutcome]":
        return self._executor.submit(self.controller.on_file_received, file_path, metadata)

    def submit_message(self, message: Dict[str, Any]) -> "Future[Optional[PipelineOutcome]]":
        return self._executor.submit(self.controller.on_message_received, message)

    def shutdown(self, wait: bool = True) -> None:
        logger.debug("Shutting down clip dispatcher")
        self._executor.shutdown(wait=wait)
