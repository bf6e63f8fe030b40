"""
CIWA severity classification.

A display hint only: it never blocks data entry or persistence, and carries
no clinical enforcement.
"""

from detox_navigator.config import SeverityConfig
from detox_navigator.domain.models import Classification, SeverityTier


def format_score(score: float) -> str:
    """Render a score without a trailing '.0' for whole numbers."""
    score = float(score)
    if score.is_integer():
        return str(int(score))
    return repr(score)


class SeverityClassifier:
    """Maps a CIWA score to a tier using bands inclusive at their lower edge."""

    def __init__(self, config: SeverityConfig | None = None) -> None:
        self.config = config or SeverityConfig()

    def tier_for(self, score: float) -> SeverityTier:
        if score >= self.config.escalate_threshold:
            return SeverityTier.ESCALATE
        if score >= self.config.watch_threshold:
            return SeverityTier.WATCH
        return SeverityTier.NORMAL

    def classify(self, score: float | None) -> Classification | None:
        """Return the tier and chip label for a score, or None when no score was recorded."""
        if score is None:
            return None

        tier = self.tier_for(score)
        label = f"CIWA {format_score(score)}"
        if tier is not SeverityTier.NORMAL:
            label = f"{label} – {tier.value}"
        return Classification(tier=tier, score=score, label=label)


_default_classifier = SeverityClassifier()


def classify(score: float | None) -> Classification | None:
    """Classify with the standard bands (watch >= 10, escalate >= 15)."""
    return _default_classifier.classify(score)
