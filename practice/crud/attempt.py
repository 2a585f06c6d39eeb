from sqlalchemy import func
from sqlalchemy.orm import Session
from practice.models import Attempt
from practice.mastery import Label
from datetime import datetime
from typing import Dict, List

def record_attempt(db: Session, problem_id: int, outcome: Label, attempted_at: datetime) -> Attempt:
    """Append an attempt to the history"""
    attempt = Attempt(
        problem_id=problem_id,
        outcome=Label(outcome).value,
        attempted_at=attempted_at
    )
    db.add(attempt)
    db.flush()
    return attempt

def get_attempts(db: Session, problem_id: int) -> List[Attempt]:
    """Get attempt history for a problem, newest first"""
    return db.query(Attempt).filter(
        Attempt.problem_id == problem_id
    ).order_by(Attempt.attempted_at.desc(), Attempt.id.desc()).all()

def count_attempts_by_problem(db: Session) -> Dict[int, int]:
    """Map problem id to its number of attempts; problems never attempted are absent"""
    rows = db.query(Attempt.problem_id, func.count(Attempt.id)).group_by(Attempt.problem_id).all()
    return {problem_id: total for problem_id, total in rows}
