# File: gameframe/features/attribution/service/matcher.py
import logging
from typing import List, Optional

from gameframe.core.config.settings import settings
from ..data.dice_scorer import DiceBigramScorer
from ..data.grams import tokenize, ngrams, normalize_name
from ..domain.interfaces import ISimilarityScorer
from ..domain.models import RosterMember, FeedbackAttribution

logger = logging.getLogger(__name__)


class SpeakerAttributionMatcher:
    """
    Decides which roster member a spoken piece of feedback is about.

    Every name variant of every member is scored against every 1..max_gram
    phrase of the transcript. The single best score wins; ties go to the
    member seen first in roster order. Below the threshold nobody is matched,
    which callers read as "feedback for the whole roster".
    """

    def __init__(self,
                 scorer: Optional[ISimilarityScorer] = None,
                 threshold: Optional[float] = None,
                 max_gram: Optional[int] = None):
        self.scorer = scorer or DiceBigramScorer()
        self.threshold = settings.ATTRIBUTION_THRESHOLD if threshold is None else threshold
        self.max_gram = settings.ATTRIBUTION_MAX_GRAM if max_gram is None else max_gram

    def attribute(self, transcript_text: str, roster: List[RosterMember]) -> FeedbackAttribution:
        grams = ngrams(tokenize(transcript_text), self.max_gram)

        best_member: Optional[RosterMember] = None
        best_score = 0.0

        for member in roster:
            for variant in member.name_variants:
                candidate = normalize_name(variant)
                if not candidate:
                    continue
                for gram in grams:
                    score = self.scorer.similarity(candidate, gram)
                    # Strict comparison keeps the earliest member on ties
                    if score > best_score:
                        best_score = score
                        best_member = member

        if best_member is not None and best_score >= self.threshold:
            logger.info(f"Matched player {best_member.player_id} "
                        f"({best_member.first_name} {best_member.last_name}) with score {best_score:.2f}")
            return FeedbackAttribution(matched_member=best_member, score=best_score)

        logger.info(f"No confident match (best_score={best_score:.2f}); feedback goes to the whole roster")
        return FeedbackAttribution(matched_member=None, score=best_score)
