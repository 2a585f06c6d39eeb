from sqlalchemy import Column, Integer, Date, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from practice.database import Base

class DailyAssignment(Base):
    """Binding of a problem to one calendar date's practice set"""
    __tablename__ = "daily_assignments"
    __table_args__ = (
        UniqueConstraint("problem_id", "assigned_date", name="uq_assignment_problem_date"),
    )

    id = Column(Integer, primary_key=True, index=True)  # insertion order within a day
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)
    assigned_date = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)

    problem = relationship("Problem", back_populates="assignments")
