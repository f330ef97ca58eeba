import logging
from threading import Lock
from typing import Iterable, Optional
from gameframe.features.attribution.domain.models import RosterMember
from ..domain.interfaces import ISessionContextProvider
from ..domain.models import GameSession
from .recording_cache import SessionRecordingCache

logger = logging.getLogger(__name__)

class GameSessionManager(ISessionContextProvider):
    """
    Owns the game session context and its recording cache.
    Each session gets a fresh cache, so a new game always starts at index 0.
    """

    def __init__(self):
        self._lock = Lock()
        self._current: Optional[GameSession] = None

    def start_session(self,
                      team_id: str,
                      game_id: str,
                      uploaded_by: str,
                      roster: Iterable[RosterMember]) -> GameSession:
        session = GameSession(
            team_id=team_id,
            game_id=game_id,
            uploaded_by=uploaded_by,
            roster=tuple(roster),
            recordings=SessionRecordingCache()
        )
        with self._lock:
            previous = self._current
            self._current = session

        if previous is not None:
            logger.warning(f"Game {previous.game_id} was still active; replacing it with {game_id}")
            previous.recordings.clear()

        logger.info(f"Game session started: game {game_id}, {len(session.roster)} players on roster")
        return session

    def end_session(self) -> Optional[GameSession]:
        """Drops the current context and clears its cache. Returns the ended session."""
        with self._lock:
            ended = self._current
            self._current = None

        if ended is None:
            logger.debug("end_session called with no active game")
            return None

        logger.info(f"Game session ended: game {ended.game_id}, {len(ended.recordings)} recordings")
        ended.recordings.clear()
        return ended

    def current_game_session(self) -> Optional[GameSession]:
        with self._lock:
            return self._current

    @property
    def recording_cache(self) -> Optional[SessionRecordingCache]:
        session = self.current_game_session()
        return session.recordings if session else None
