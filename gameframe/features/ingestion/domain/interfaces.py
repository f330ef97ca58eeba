from abc import ABC, abstractmethod
from typing import Any, Dict

class ICompanionTransport(ABC):
    """
    Contract for the channel to the paired companion device.
    Delivery, queuing and retry of queued payloads are the transport's business.
    """

    @abstractmethod
    def is_paired(self) -> bool:
        pass

    @abstractmethod
    def is_app_installed(self) -> bool:
        pass

    @abstractmethod
    def is_reachable(self) -> bool:
        """True when a message can be delivered right now."""
        pass

    @abstractmethod
    def send_message(self, payload: Dict[str, Any]) -> None:
        """Immediate delivery. Raises if the device cannot take it."""
        pass

    @abstractmethod
    def queue_message(self, payload: Dict[str, Any]) -> None:
        """Store-and-forward delivery. Must return without waiting for the device."""
        pass
