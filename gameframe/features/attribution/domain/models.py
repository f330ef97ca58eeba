# File: gameframe/features/attribution/domain/models.py
from dataclasses import dataclass
from typing import List, Optional

@dataclass(frozen=True)
class RosterMember:
    """
    Snapshot of one team member, taken when a game session starts.
    """
    player_id: str
    first_name: str
    last_name: str
    nickname: Optional[str] = None
    jersey: Optional[int] = None

    @property
    def name_variants(self) -> List[str]:
        """First name, last name and nickname (if any), in that order."""
        variants = [self.first_name, self.last_name]
        if self.nickname:
            variants.append(self.nickname)
        return variants

@dataclass(frozen=True)
class FeedbackAttribution:
    """
    The matcher's decision for one clip.
    matched_member = None means the feedback applies to the whole roster.
    """
    matched_member: Optional[RosterMember]
    score: float

    def resolve_targets(self, roster: List[RosterMember]) -> List[RosterMember]:
        """The members the feedback is for: the match, or everyone in roster order."""
        if self.matched_member is not None:
            return [self.matched_member]
        return list(roster)

    def resolve_player_ids(self, roster: List[RosterMember]) -> List[str]:
        return [member.player_id for member in self.resolve_targets(roster)]
