from typing import List
from ..domain.models import RosterMember, FeedbackAttribution
from .matcher import SpeakerAttributionMatcher

def attribute(transcript_text: str, roster: List[RosterMember]) -> FeedbackAttribution:
    """
    Standalone API for attributing a transcript with the default settings.
    Useful for testing or CLI tools without an ingestion controller.
    """
    return SpeakerAttributionMatcher().attribute(transcript_text, roster)
