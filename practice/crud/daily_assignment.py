from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload
from practice.models import DailyAssignment
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

def get_assignments_for_date(db: Session, assigned_date: date) -> List[DailyAssignment]:
    """Get a day's assignment rows in creation order"""
    return db.query(DailyAssignment).options(
        joinedload(DailyAssignment.problem)
    ).filter(
        DailyAssignment.assigned_date == assigned_date
    ).order_by(DailyAssignment.id).all()

def get_assignment(db: Session, problem_id: int, assigned_date: date) -> Optional[DailyAssignment]:
    """Get the assignment row for (problem, date)"""
    return db.query(DailyAssignment).filter(
        DailyAssignment.problem_id == problem_id,
        DailyAssignment.assigned_date == assigned_date
    ).first()

def add_assignments(db: Session, problem_ids: Iterable[int], assigned_date: date) -> List[DailyAssignment]:
    """Insert one not-completed row per problem, preserving the given order"""
    rows = []
    for problem_id in problem_ids:
        row = DailyAssignment(problem_id=problem_id, assigned_date=assigned_date, completed=False)
        db.add(row)
        # Flush one at a time so ids follow insertion order
        db.flush()
        rows.append(row)
    return rows

def delete_assignment(db: Session, assignment: DailyAssignment):
    """Remove one assignment row"""
    db.delete(assignment)
    db.flush()

def delete_pending_assignments(db: Session, assigned_date: date) -> int:
    """Remove a day's not-yet-completed rows; completed rows stay"""
    pending = db.query(DailyAssignment).filter(
        DailyAssignment.assigned_date == assigned_date,
        DailyAssignment.completed.is_(False)
    ).all()
    for row in pending:
        db.delete(row)
    db.flush()
    return len(pending)

def get_completion_by_date(db: Session, before: date) -> Dict[date, Tuple[int, int]]:
    """Map each date before ``before`` to (total rows, completed rows)"""
    rows = db.query(
        DailyAssignment.assigned_date,
        func.count(DailyAssignment.id),
        func.sum(case((DailyAssignment.completed.is_(True), 1), else_=0))
    ).filter(
        DailyAssignment.assigned_date < before
    ).group_by(DailyAssignment.assigned_date).all()
    return {day: (total, completed or 0) for day, total, completed in rows}
