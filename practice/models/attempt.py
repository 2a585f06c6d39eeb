from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from practice.database import Base

class Attempt(Base):
    """Append-only record of one reported outcome"""
    __tablename__ = "attempts"
    __table_args__ = (
        CheckConstraint(
            "outcome IN ('struggling', 'okay', 'mastered')",
            name="ck_attempt_outcome"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False, index=True)
    outcome = Column(String, nullable=False)  # struggling, okay, mastered
    attempted_at = Column(DateTime, nullable=False, default=datetime.now)

    problem = relationship("Problem", back_populates="attempts")
