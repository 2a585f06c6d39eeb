"""
Eligibility filter and random draw for a day's practice set.

Selection is uniform over the eligible candidates at the moment of the call:
no weighting by label, insight or age.
"""

import logging
from datetime import date
from typing import Iterable, List, Sequence, TypeVar

from sqlalchemy.orm import Session

from practice.crud import get_eligible_problems
from practice.models import Problem

logger = logging.getLogger(__name__)

T = TypeVar("T")


def eligible_candidates(db: Session, today: date, exclude_ids: Iterable[int] = ()) -> List[Problem]:
    """Problems eligible on ``today`` minus ``exclude_ids``, ordered by id"""
    candidates = get_eligible_problems(db, today, exclude_ids)
    logger.debug("%d eligible candidates for %s", len(candidates), today)
    return candidates


def draw(candidates: Sequence[T], count: int, rng) -> List[T]:
    """Pick up to ``count`` distinct candidates without replacement"""
    if count <= 0 or not candidates:
        return []
    return rng.sample(list(candidates), min(count, len(candidates)))
