from abc import ABC, abstractmethod

class ISimilarityScorer(ABC):
    """
    Contract for string closeness used by the attribution matcher.
    Lets us swap the bigram scorer for a phonetic or edit-distance one later.
    """
    @abstractmethod
    def similarity(self, a: str, b: str) -> float:
        """
        Scores two already-normalized strings.

        Returns:
            A value in [0, 1]. Must be symmetric, 1.0 for identical non-empty
            inputs, and 0.0 when both are empty.
        """
        pass
