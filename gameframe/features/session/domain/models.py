# File: gameframe/features/session/domain/models.py
from dataclasses import dataclass, field
from typing import Tuple, TYPE_CHECKING
from gameframe.core.shared_types import RecordingWindow
from gameframe.features.attribution.domain.models import RosterMember

if TYPE_CHECKING:
    from ..service.recording_cache import SessionRecordingCache

@dataclass(frozen=True)
class SessionRecordingEntry:
    """
    One fully stored recording, as shown live during the game.
    local_index is the cache's own append position, not a remote id.
    """
    local_index: int
    key_moment_id: str
    transcript_id: str
    text: str
    window: RecordingWindow
    feedback_for: Tuple[RosterMember, ...] = field(default_factory=tuple)

@dataclass(frozen=True)
class GameSession:
    """
    Context of the game currently being recorded.
    The roster is a read-only snapshot; recordings is the session's own cache.
    """
    team_id: str
    game_id: str
    uploaded_by: str
    roster: Tuple[RosterMember, ...] = field(default_factory=tuple)
    recordings: "SessionRecordingCache" = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.recordings is None:
            from ..service.recording_cache import SessionRecordingCache
            object.__setattr__(self, "recordings", SessionRecordingCache())

    @property
    def roster_ids(self):
        return [member.player_id for member in self.roster]
