"""
Daily selection engine.

Decides which problems to practise on a date, keeps that decision stable
across repeated requests, lets the caller swap one slot or refresh the set,
and folds completion results back into each problem's mastery state.

The engine keeps no state between calls: each operation opens one store
transaction scoped to its date and reads ``today`` from the clock at most
once.
"""

import logging
import random
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from practice.clock import Clock, SystemClock
from practice.config import settings
from practice.crud import (
    add_assignments,
    count_problems,
    delete_assignment,
    delete_pending_assignments,
    get_assignment,
    get_assignments_for_date,
    get_daily_problem_count,
    record_attempt,
    require_problem,
)
from practice.database import transaction
from practice.errors import (
    AlreadyCompletedError,
    NoCandidateAvailableError,
    NotFoundError,
)
from practice.mastery import Label, MasteryPolicy
from practice.models import DailyAssignment, Problem
from practice.schemas import (
    DailyProblem,
    InsightResponse,
    ProblemResponse,
    SettingsUpdate,
    StatsResponse,
)
from practice.selection import draw, eligible_candidates
from practice.stats import current_streak, ready_for_review

logger = logging.getLogger(__name__)


def _to_daily(row: DailyAssignment) -> DailyProblem:
    problem = row.problem
    return DailyProblem(
        assignment_id=row.id,
        problem_id=row.problem_id,
        assigned_date=row.assigned_date,
        completed=bool(row.completed),
        name=problem.name,
        link=problem.link,
        label=problem.label,
        last_reviewed=problem.last_reviewed,
        review_count=problem.review_count,
        key_insight=problem.key_insight,
    )


class DailySelector:
    """Builds, mutates and completes the per-day practice set"""

    def __init__(
        self,
        session_factory=None,
        clock: Optional[Clock] = None,
        rng=None,
        daily_problem_count: Optional[int] = None,
    ):
        """
        Args:
            session_factory: Session factory for the problem store (defaults to SessionLocal)
            clock: Source of the user-local date (defaults to the system clock)
            rng: Random source exposing ``sample`` and ``choice``
            daily_problem_count: Count used when none is stored in app settings (3..10)

        Raises:
            pydantic.ValidationError: daily_problem_count outside 3..10
        """
        self.session_factory = session_factory
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        if daily_problem_count is None:
            daily_problem_count = settings.daily_problem_count
        # Same 3..10 bound as the stored setting
        self.daily_problem_count = SettingsUpdate(daily_problem_count=daily_problem_count).daily_problem_count

    def _day(self, day: Optional[date]) -> date:
        return day if day is not None else self.clock.today()

    def _count(self, db: Session) -> int:
        return get_daily_problem_count(db, default=self.daily_problem_count)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def get_or_create_today(self, day: Optional[date] = None) -> List[DailyProblem]:
        """
        Return the practice set for a date, creating it on first request.

        Existing rows are returned unchanged and in creation order, whatever
        their completion state.
        """
        day = self._day(day)
        with transaction(self.session_factory, day) as db:
            rows = get_assignments_for_date(db, day)
            if not rows:
                count = self._count(db)
                picked = draw(eligible_candidates(db, day), count, self.rng)
                add_assignments(db, [p.id for p in picked], day)
                rows = get_assignments_for_date(db, day)
                logger.info("Created practice set for %s with %d of %d problems", day, len(rows), count)
            return [_to_daily(row) for row in rows]

    def refresh_today(self, day: Optional[date] = None) -> List[DailyProblem]:
        """
        Redraw a date's unfinished slots.

        Completed rows are kept and their problems are not drawn again. The
        set is topped back up to the daily count; an empty eligible pool
        simply yields fewer rows.
        """
        day = self._day(day)
        with transaction(self.session_factory, day) as db:
            completed_ids = [r.problem_id for r in get_assignments_for_date(db, day) if r.completed]
            removed = delete_pending_assignments(db, day)
            count = self._count(db)
            slots = max(count - len(completed_ids), 0)
            picked = draw(eligible_candidates(db, day, exclude_ids=completed_ids), slots, self.rng)
            add_assignments(db, [p.id for p in picked], day)
            rows = get_assignments_for_date(db, day)
            logger.info(
                "Refreshed practice set for %s: dropped %d, drew %d, kept %d completed",
                day, removed, len(picked), len(completed_ids)
            )
            return [_to_daily(row) for row in rows]

    def replace_one(self, problem_id: int, day: Optional[date] = None) -> DailyProblem:
        """
        Swap one unfinished slot for a random eligible problem not yet in the set.

        Raises:
            NotFoundError: no unfinished assignment for (problem, date)
            NoCandidateAvailableError: nothing eligible to swap in; the set is unchanged
        """
        day = self._day(day)
        with transaction(self.session_factory, day) as db:
            current = get_assignment(db, problem_id, day)
            if current is None:
                raise NotFoundError(f"Problem {problem_id} is not in the practice set for {day}")
            if current.completed:
                raise NotFoundError(f"Problem {problem_id} is already completed for {day} and cannot be replaced")

            assigned_ids = [r.problem_id for r in get_assignments_for_date(db, day)]
            candidates = eligible_candidates(db, day, exclude_ids=assigned_ids)
            if not candidates:
                logger.warning("No replacement available for problem %d on %s", problem_id, day)
                raise NoCandidateAvailableError(f"No eligible problem available to replace {problem_id}")

            replacement = self.rng.choice(candidates)
            delete_assignment(db, current)
            row = add_assignments(db, [replacement.id], day)[0]
            logger.info("Replaced problem %d with %d on %s", problem_id, replacement.id, day)
            return _to_daily(row)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def _apply_outcome(self, db: Session, problem: Problem, outcome: Label, day: date) -> Problem:
        new_label, last_reviewed = MasteryPolicy.next_state(problem.label, outcome, day)
        problem.label = new_label.value
        problem.last_reviewed = last_reviewed
        problem.review_count = (problem.review_count or 0) + 1
        record_attempt(db, problem.id, outcome, self.clock.now())
        db.flush()
        return problem

    def complete(self, problem_id: int, outcome, day: Optional[date] = None) -> ProblemResponse:
        """
        Report the outcome of a problem from a date's practice set.

        The label update, the attempt record and the completed flag are
        written together or not at all.

        Raises:
            InvalidOutcomeError: outcome is 'new' or unknown (checked first)
            NotFoundError: the problem is not part of the date's set
            AlreadyCompletedError: the assignment was completed before
        """
        outcome = MasteryPolicy.parse_outcome(outcome)
        day = self._day(day)
        with transaction(self.session_factory, day) as db:
            assignment = get_assignment(db, problem_id, day)
            if assignment is None:
                raise NotFoundError(f"Problem {problem_id} is not in the practice set for {day}")
            if assignment.completed:
                raise AlreadyCompletedError(f"Problem {problem_id} was already completed on {day}")

            problem = self._apply_outcome(db, require_problem(db, problem_id), outcome, day)
            assignment.completed = True
            db.flush()
            logger.info("Completed problem %d on %s as %s", problem_id, day, outcome.value)
            return ProblemResponse.model_validate(problem)

    def review(
        self,
        problem_id: int,
        outcome,
        key_insight: Optional[str] = None,
        day: Optional[date] = None,
    ) -> ProblemResponse:
        """
        Record an attempt outside the daily set.

        Applies the same transition as ``complete`` without touching any
        assignment row. A given ``key_insight`` replaces the stored one; an
        empty string clears it.
        """
        outcome = MasteryPolicy.parse_outcome(outcome)
        day = self._day(day)
        with transaction(self.session_factory, day) as db:
            problem = self._apply_outcome(db, require_problem(db, problem_id), outcome, day)
            if key_insight is not None:
                problem.key_insight = key_insight or None
                db.flush()
            logger.info("Reviewed problem %d on %s as %s", problem_id, day, outcome.value)
            return ProblemResponse.model_validate(problem)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def ready_for_review(self, day: Optional[date] = None) -> int:
        """Count previously attempted problems due on a date"""
        day = self._day(day)
        with transaction(self.session_factory) as db:
            return ready_for_review(db, day)

    def current_streak(self, day: Optional[date] = None) -> int:
        """Count consecutive fully completed days before a date"""
        day = self._day(day)
        with transaction(self.session_factory) as db:
            return current_streak(db, day)

    def stats(self, day: Optional[date] = None) -> StatsResponse:
        day = self._day(day)
        with transaction(self.session_factory) as db:
            return StatsResponse(
                total_problems=count_problems(db),
                mastered_problems=count_problems(db, Label.MASTERED),
                current_streak=current_streak(db, day),
                ready_for_review=ready_for_review(db, day),
            )

    def random_insight(
        self,
        exclude_ids: Iterable[int] = (),
        day: Optional[date] = None,
    ) -> Optional[InsightResponse]:
        """Pick a key insight from the date's set, skipping ``exclude_ids``"""
        day = self._day(day)
        excluded = set(exclude_ids)
        with transaction(self.session_factory) as db:
            pool = [
                row.problem for row in get_assignments_for_date(db, day)
                if row.problem_id not in excluded and (row.problem.key_insight or "").strip()
            ]
            if not pool:
                return None
            problem = self.rng.choice(pool)
            return InsightResponse(
                problem_id=problem.id,
                problem_name=problem.name,
                problem_link=problem.link,
                key_insight=problem.key_insight,
            )
