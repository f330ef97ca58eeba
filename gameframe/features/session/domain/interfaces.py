from abc import ABC, abstractmethod
from typing import Optional
from .models import GameSession

class ISessionContextProvider(ABC):
    @abstractmethod
    def current_game_session(self) -> Optional[GameSession]:
        """The game being recorded right now, or None when no game is running."""
        pass
