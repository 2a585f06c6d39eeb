"""
Test fixtures for the daily practice engine.

Provides a file-based SQLite store per test, a fixed clock, a seeded random
source and helpers for seeding problems in any mastery state.
"""

from __future__ import annotations

import random
from datetime import date, timedelta

import pytest
from sqlalchemy.orm import sessionmaker

from practice.clock import FixedClock
from practice.database import create_db_engine, init_db
from practice.engine import DailySelector
from practice.models import DailyAssignment, Problem

TODAY = date(2026, 3, 10)


@pytest.fixture
def db_engine(tmp_path):
    """File-backed SQLite engine with all tables created."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def selector(session_factory, clock):
    return DailySelector(
        session_factory=session_factory,
        clock=clock,
        rng=random.Random(1234),
        daily_problem_count=5,
    )


@pytest.fixture
def add_problem(session_factory):
    """Insert a problem directly; ``days_ago`` sets last_reviewed relative to TODAY."""
    counter = {"n": 0}

    def _add(label="new", days_ago=None, key_insight=None, name=None):
        counter["n"] += 1
        n = counter["n"]
        reviewed = label != "new"
        session = session_factory()
        try:
            problem = Problem(
                name=name or f"Problem {n}",
                link=f"https://leetcode.com/problems/problem-{n}/",
                label=label,
                last_reviewed=TODAY - timedelta(days=days_ago) if days_ago is not None else None,
                review_count=1 if reviewed else 0,
                key_insight=key_insight,
            )
            session.add(problem)
            session.commit()
            return problem.id
        finally:
            session.close()

    return _add


@pytest.fixture
def add_assignment(session_factory):
    """Insert an assignment row for an arbitrary date."""

    def _add(problem_id, day, completed=False):
        session = session_factory()
        try:
            row = DailyAssignment(problem_id=problem_id, assigned_date=day, completed=completed)
            session.add(row)
            session.commit()
            return row.id
        finally:
            session.close()

    return _add


@pytest.fixture
def fetch_problem(session_factory):
    def _fetch(problem_id):
        session = session_factory()
        try:
            problem = session.get(Problem, problem_id)
            if problem is not None:
                session.expunge(problem)
            return problem
        finally:
            session.close()

    return _fetch
