from datetime import date, timedelta
from enum import Enum
from typing import Dict, Optional, Tuple

from practice.errors import InvalidOutcomeError


class Label(str, Enum):
    """Four-stage mastery label, ordered by review cadence"""
    NEW = "new"
    STRUGGLING = "struggling"
    OKAY = "okay"
    MASTERED = "mastered"


# Minimum elapsed days before a reviewed problem is eligible again
REVIEW_INTERVALS: Dict[Label, int] = {
    Label.STRUGGLING: 3,
    Label.OKAY: 7,
    Label.MASTERED: 14,
}

OUTCOME_LABELS = tuple(REVIEW_INTERVALS)


class MasteryPolicy:
    """
    Label transitions and review cadence for tracked problems.

    A reported outcome always becomes the problem's new label; there is no
    blending or gradual demotion. Eligibility is a fixed minimum interval per
    label counted in whole days.
    """

    @staticmethod
    def parse_outcome(outcome) -> Label:
        """
        Validate a reported outcome.

        Raises:
            InvalidOutcomeError: for ``new`` or any unknown value
        """
        try:
            label = Label(outcome)
        except ValueError:
            raise InvalidOutcomeError(
                f"Outcome must be one of: {', '.join(l.value for l in OUTCOME_LABELS)} (got {outcome!r})"
            ) from None
        if label is Label.NEW:
            raise InvalidOutcomeError("'new' is not a reportable outcome")
        return label

    @staticmethod
    def next_state(current_label, outcome, today: date) -> Tuple[Label, date]:
        """
        Calculate the label and last-reviewed date after an attempt.

        Args:
            current_label: Label before the attempt (any of the four)
            outcome: Reported outcome (struggling, okay or mastered)
            today: Date of the attempt

        Returns:
            (new_label, new_last_reviewed)
        """
        # The current label never blends into the result
        return MasteryPolicy.parse_outcome(outcome), today

    @staticmethod
    def is_eligible(label, last_reviewed: Optional[date], today: date) -> bool:
        """Check if a problem may be selected on ``today``"""
        label = Label(label)
        if label is Label.NEW or last_reviewed is None:
            return True
        return (today - last_reviewed).days >= REVIEW_INTERVALS[label]

    @staticmethod
    def due_date(label, last_reviewed: Optional[date]) -> Optional[date]:
        """First date a problem becomes eligible; None when always eligible"""
        label = Label(label)
        if label is Label.NEW or last_reviewed is None:
            return None
        return last_reviewed + timedelta(days=REVIEW_INTERVALS[label])

    @staticmethod
    def review_cutoff(label, today: date) -> date:
        """Latest last-reviewed date that makes ``label`` eligible on ``today``"""
        return today - timedelta(days=REVIEW_INTERVALS[Label(label)])
