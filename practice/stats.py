from datetime import date, timedelta

from sqlalchemy.orm import Session

from practice.crud import count_due_for_review, get_completion_by_date


def ready_for_review(db: Session, today: date) -> int:
    """
    Count previously attempted problems that are due on ``today``.

    New problems are always selectable but carry no review pressure, so they
    are left out. Problems sitting in today's unfinished set still count.
    """
    return count_due_for_review(db, today)


def current_streak(db: Session, today: date) -> int:
    """
    Count consecutive fully completed days ending yesterday.

    Today is still in progress and never counted. A day without any
    assignment breaks the streak.
    """
    completion = get_completion_by_date(db, before=today)
    streak = 0
    day = today - timedelta(days=1)
    while True:
        total, completed = completion.get(day, (0, 0))
        if total == 0 or completed != total:
            break
        streak += 1
        day -= timedelta(days=1)
    return streak
