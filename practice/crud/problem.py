from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session
from practice.models import Problem
from practice.schemas import ProblemCreate, ProblemUpdate
from practice.mastery import Label, MasteryPolicy, REVIEW_INTERVALS
from practice.errors import DuplicateProblemError, NotFoundError
from datetime import date
from typing import Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)

def _due_clause(today: date):
    """SQL predicate equivalent to MasteryPolicy.is_eligible"""
    clauses = [Problem.label == Label.NEW.value]
    for label in REVIEW_INTERVALS:
        clauses.append(and_(
            Problem.label == label.value,
            or_(
                Problem.last_reviewed.is_(None),
                Problem.last_reviewed <= MasteryPolicy.review_cutoff(label, today)
            )
        ))
    return or_(*clauses)

def _check_link_free(db: Session, link: str, problem_id: Optional[int] = None):
    query = db.query(Problem.id).filter(Problem.link == link)
    if problem_id is not None:
        query = query.filter(Problem.id != problem_id)
    if query.first():
        raise DuplicateProblemError(f"Problem link already exists: {link}")

def create_problem(db: Session, problem: ProblemCreate) -> Problem:
    """Add a new problem in label 'new'"""
    _check_link_free(db, problem.link)
    db_problem = Problem(
        name=problem.name,
        link=problem.link,
        key_insight=problem.key_insight or None,
        label=Label.NEW.value,
        review_count=0
    )
    db.add(db_problem)
    db.flush()
    logger.info("Created problem %d: %s", db_problem.id, db_problem.name)
    return db_problem

def get_problem(db: Session, problem_id: int) -> Optional[Problem]:
    """Get problem by ID"""
    return db.query(Problem).filter(Problem.id == problem_id).first()

def require_problem(db: Session, problem_id: int) -> Problem:
    """Get problem by ID or raise NotFoundError"""
    problem = get_problem(db, problem_id)
    if problem is None:
        raise NotFoundError(f"Problem {problem_id} not found")
    return problem

def list_problems(db: Session, label: Optional[str] = None, search: Optional[str] = None) -> List[Problem]:
    """Get all problems, optionally filtered by label and a case-insensitive name fragment"""
    query = db.query(Problem)
    if label is not None:
        query = query.filter(Problem.label == Label(label).value)
    if search and search.strip():
        # Match % and _ literally
        fragment = search.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = query.filter(Problem.name.ilike(f"%{fragment}%", escape="\\"))
    return query.order_by(Problem.id).all()

def update_problem(db: Session, problem_id: int, problem_data: ProblemUpdate) -> Problem:
    """Update descriptive fields; label and review fields are not editable here"""
    db_problem = require_problem(db, problem_id)
    updates = problem_data.model_dump(exclude_unset=True)
    if updates.get("link") is not None:
        _check_link_free(db, updates["link"], problem_id)
    for key, value in updates.items():
        if key in ("name", "link") and value is None:
            continue
        if key == "key_insight":
            value = value or None
        setattr(db_problem, key, value)
    db.flush()
    return db_problem

def delete_problem(db: Session, problem_id: int):
    """Delete a problem along with its attempts and assignments"""
    db_problem = require_problem(db, problem_id)
    db.delete(db_problem)
    db.flush()
    logger.info("Deleted problem %d", problem_id)

def get_eligible_problems(db: Session, today: date, exclude_ids: Iterable[int] = ()) -> List[Problem]:
    """Get all problems eligible for practice on the given date"""
    query = db.query(Problem).filter(_due_clause(today))
    exclude_ids = list(exclude_ids)
    if exclude_ids:
        query = query.filter(Problem.id.not_in(exclude_ids))
    return query.order_by(Problem.id).all()

def count_due_for_review(db: Session, today: date) -> int:
    """Count previously attempted problems whose review interval has elapsed"""
    return db.query(func.count(Problem.id)).filter(
        Problem.label != Label.NEW.value,
        _due_clause(today)
    ).scalar()

def count_problems(db: Session, label: Optional[str] = None) -> int:
    """Count problems, optionally by label"""
    query = db.query(func.count(Problem.id))
    if label is not None:
        query = query.filter(Problem.label == Label(label).value)
    return query.scalar()
