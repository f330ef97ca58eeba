# File: gameframe/features/ingestion/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from gameframe.core.common.enums import PipelineStage, PipelineStatus
from gameframe.core.shared_types import RecordingWindow
from gameframe.features.attribution.domain.models import FeedbackAttribution
from gameframe.features.session.domain.models import SessionRecordingEntry

# Keys used by the companion app
START_KEY = "recording_start_time"
END_KEY = "recording_end_time"
TRANSCRIPT_KEY = "test_transcript"
APP_VERSION_KEY = "watchAppVersion"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accepts datetimes, ISO-8601 strings and epoch seconds. Anything else -> None."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        # fromisoformat only accepts a "Z" suffix from 3.11 on
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


@dataclass(frozen=True)
class ClipTransfer:
    """
    A clip file handed over by the transport, plus its metadata.
    """
    file_path: Path
    window: RecordingWindow
    source_metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_transport(cls, file_path: Path, metadata: Optional[Dict[str, Any]]) -> "ClipTransfer":
        """
        A missing timestamp takes the other one's value; with neither, the
        time of receipt is used. Raises ValueError if end is before start.
        """
        metadata = metadata or {}
        start = parse_timestamp(metadata.get(START_KEY))
        end = parse_timestamp(metadata.get(END_KEY))
        if start is None and end is None:
            start = end = datetime.now(timezone.utc)
        start = start or end
        end = end or start
        return cls(file_path=Path(file_path), window=RecordingWindow(start=start, end=end),
                   source_metadata=dict(metadata))


@dataclass(frozen=True)
class TranscriptMessage:
    """
    A transcript the companion produced itself, sent without audio.
    """
    text: str
    window: RecordingWindow

    @classmethod
    def from_transport(cls, message: Dict[str, Any]) -> Optional["TranscriptMessage"]:
        """
        Returns None unless all three recording keys are present and valid.
        Raises ValueError if end is before start.
        """
        start = parse_timestamp(message.get(START_KEY))
        end = parse_timestamp(message.get(END_KEY))
        text = message.get(TRANSCRIPT_KEY)
        if start is None or end is None or not isinstance(text, str):
            return None
        return cls(text=text, window=RecordingWindow(start=start, end=end))


@dataclass(frozen=True)
class PipelineOutcome:
    """
    How one clip's pipeline run ended.
    stage is the last stage entered; for FAILED runs it is where it broke.
    """
    status: PipelineStatus
    stage: PipelineStage
    entry: Optional[SessionRecordingEntry] = None
    attribution: Optional[FeedbackAttribution] = None
    key_moment_id: Optional[str] = None
    transcript_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == PipelineStatus.CACHED
