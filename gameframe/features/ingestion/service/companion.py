# File: gameframe/features/ingestion/service/companion.py
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from gameframe.core.common.enums import DeliveryStatus
from gameframe.core.config.settings import settings
from gameframe.features.session.domain.interfaces import ISessionContextProvider
from ..domain.interfaces import ICompanionTransport
from ..domain.models import PipelineOutcome, APP_VERSION_KEY, START_KEY, END_KEY, TRANSCRIPT_KEY
from .controller import RecordingIngestionController

logger = logging.getLogger(__name__)


def _version_tuple(version: str) -> Optional[Tuple[int, ...]]:
    try:
        return tuple(int(part) for part in version.strip().split("."))
    except ValueError:
        return None


def is_version_at_least(version: Optional[str], minimum: str) -> bool:
    """Numeric dotted comparison: "1.10.0" >= "1.2.0". Unparseable versions fail."""
    if not version:
        return False
    current = _version_tuple(version)
    required = _version_tuple(minimum)
    if current is None or required is None:
        return False

    width = max(len(current), len(required))
    current += (0,) * (width - len(current))
    required += (0,) * (width - len(required))
    return current >= required


class CompanionLink:
    """
    The phone's side of the link to the paired companion device.

    Routes incoming files and messages to the ingestion controller, tells the
    companion when a game starts or ends, and keeps a heartbeat going while
    a game is being recorded.
    """

    def __init__(self,
                 transport: ICompanionTransport,
                 controller: RecordingIngestionController,
                 session_provider: ISessionContextProvider,
                 min_app_version: Optional[str] = None,
                 heartbeat_interval: Optional[float] = None):
        self.transport = transport
        self.controller = controller
        self.session_provider = session_provider
        self.min_app_version = min_app_version or settings.MIN_COMPANION_APP_VERSION
        self.heartbeat_interval = heartbeat_interval or settings.HEARTBEAT_INTERVAL_SECONDS

        self.app_version: Optional[str] = None

        self._heartbeat_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    # --- Device state ---

    @property
    def can_record(self) -> bool:
        return self.transport.is_paired() and self.transport.is_app_installed()

    @property
    def is_reachable(self) -> bool:
        return self.transport.is_reachable()

    @property
    def is_app_version_valid(self) -> bool:
        return is_version_at_least(self.app_version, self.min_app_version)

    # --- Outgoing ---

    def send_or_queue(self, payload: Dict[str, Any]) -> DeliveryStatus:
        """
        Sends now if the companion is reachable, otherwise hands the payload to
        the transport's queue. Never waits for the device.
        """
        if not self.transport.is_reachable():
            logger.info(f"Companion not reachable, queuing {sorted(payload)}")
            self.transport.queue_message(payload)
            return DeliveryStatus.QUEUED

        try:
            self.transport.send_message(payload)
        except Exception as e:
            logger.warning(f"Failed to send {sorted(payload)} to companion, queuing instead: {e}")
            self.transport.queue_message(payload)
            return DeliveryStatus.QUEUED

        return DeliveryStatus.SENT

    def notify_game_started(self, game_id: str) -> DeliveryStatus:
        status = self.send_or_queue({"gameRecordingOn": True})
        logger.info(f"Notified companion that game {game_id} started ({status.value})")
        return status

    def notify_game_ended(self) -> DeliveryStatus:
        status = self.send_or_queue({"gameRecordingOn": False})
        logger.info(f"Notified companion that the game ended ({status.value})")
        return status

    # --- Heartbeats ---

    def send_heartbeat(self) -> bool:
        """Returns True if a heartbeat went out. Skipped while unreachable."""
        if not self.transport.is_reachable():
            return False
        try:
            self.transport.send_message({"heartbeat": True})
        except Exception as e:
            logger.warning(f"Failed to send heartbeat: {e}")
            return False
        return True

    def start_heartbeats(self) -> None:
        self.stop_heartbeats()

        self._stop_event.clear()
        self._heartbeat_thread = threading.Thread(
            target=self._heartbeat_loop,
            name="CompanionHeartbeat",
            daemon=True,
        )
        self._heartbeat_thread.start()
        logger.debug("Companion heartbeats started")

    def stop_heartbeats(self) -> None:
        if self._heartbeat_thread is None:
            return
        self._stop_event.set()
        self._heartbeat_thread.join(timeout=self.heartbeat_interval * 2)
        self._heartbeat_thread = None
        logger.debug("Companion heartbeats stopped")

    def _heartbeat_loop(self) -> None:
        while not self._stop_event.wait(self.heartbeat_interval):
            self.send_heartbeat()

    # --- Incoming ---

    def on_file(self, file_path: Path, metadata: Optional[Dict[str, Any]] = None) -> PipelineOutcome:
        return self.controller.on_file_received(file_path, metadata)

    def on_message(self, message: Dict[str, Any]) -> Optional[PipelineOutcome]:
        """
        Handles a fire-and-forget message. Version reports are recorded;
        recordings go through the pipeline. Returns the pipeline outcome, if any.
        """
        if APP_VERSION_KEY in message:
            self.app_version = str(message[APP_VERSION_KEY])
            logger.info(f"Companion app version: {self.app_version}")

        if any(key in message for key in (START_KEY, END_KEY, TRANSCRIPT_KEY)):
            return self.controller.on_message_received(message)

        return None

    def on_request(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Answers messages that expect a reply."""
        if message.get("requestState") is True:
            is_game_running = self.session_provider.current_game_session() is not None
            return {"gameRecordingOn": is_game_running}
        return {}
