from abc import ABC, abstractmethod
from pathlib import Path

class IClipInbox(ABC):
    @abstractmethod
    def accept(self, incoming: Path) -> Path:
        """
        Moves a file handed over by the transport into private storage.
        Returns: the new absolute path.
        """
        pass

    @abstractmethod
    def release(self, path: Path) -> None:
        """Deletes a previously accepted clip."""
        pass

class IAudioStorage(ABC):
    @abstractmethod
    def upload_audio(self, local_file: Path, remote_path: str) -> str:
        """
        Uploads a clip to durable storage under remote_path.
        Returns: the URL it can be read back from.
        """
        pass
