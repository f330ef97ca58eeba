from dataclasses import dataclass
from gameframe.core.shared_types import MediaFile, RecordingWindow

@dataclass(frozen=True)
class IngestedClip:
    """
    A received clip after it has been moved into the private inbox.
    Transient: released once the pipeline run is over.
    """
    audio_ref: MediaFile
    metadata: RecordingWindow
    source_path: str
