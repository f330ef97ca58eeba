import shutil
import uuid
import logging
from pathlib import Path
from typing import Optional
from gameframe.core.config.settings import settings
from ..domain.interfaces import IClipInbox, IAudioStorage

logger = logging.getLogger(__name__)

class LocalClipInbox(IClipInbox):
    def __init__(self, inbox_dir: Optional[Path] = None):
        self.inbox_dir = inbox_dir or settings.CLIP_INBOX_DIR

    def accept(self, incoming: Path) -> Path:
        """
        Moves the transport's temp file to: {inbox_dir}/{uuid}.{ext}
        The transport may reclaim its own copy as soon as the callback returns.
        """
        self.inbox_dir.mkdir(parents=True, exist_ok=True)

        extension = incoming.suffix.lower() or ".m4a"
        destination = self.inbox_dir / f"{uuid.uuid4()}{extension}"

        # Copy + Unlink is safer across different partitions/drives
        shutil.copy2(str(incoming), str(destination))
        try:
            incoming.unlink()
        except OSError:
            destination.unlink(missing_ok=True)
            raise

        logger.debug(f"Moved {incoming.name} to {destination}")
        return destination

    def release(self, path: Path) -> None:
        path.unlink(missing_ok=True)


class LocalAudioStorage(IAudioStorage):
    """
    Stores uploaded clips under the artifacts folder, mirroring the remote layout:
    {artifacts_dir}/audio/{team_id}/{game_id}/{uuid}.m4a
    """
    def __init__(self, root_dir: Optional[Path] = None):
        self.root_dir = root_dir or settings.ARTIFACTS_DIR

    def upload_audio(self, local_file: Path, remote_path: str) -> str:
        if not local_file.exists():
            raise FileNotFoundError(f"Clip not found: {local_file}")

        destination = self.root_dir / remote_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(str(local_file), str(destination))

        return destination.resolve().as_uri()
