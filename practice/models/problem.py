from sqlalchemy import Column, Integer, String, Text, Date, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from practice.database import Base

class Problem(Base):
    """Tracked interview problem with its mastery label"""
    __tablename__ = "problems"
    __table_args__ = (
        CheckConstraint(
            "label IN ('new', 'struggling', 'okay', 'mastered')",
            name="ck_problem_label"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    link = Column(String, unique=True, nullable=False)

    # Mastery tracking
    label = Column(String, nullable=False, default="new")  # new, struggling, okay, mastered
    last_reviewed = Column(Date)  # null until the first attempt
    review_count = Column(Integer, nullable=False, default=0)

    key_insight = Column(Text)
    created_at = Column(DateTime, default=datetime.now)

    attempts = relationship(
        "Attempt", back_populates="problem",
        cascade="all", passive_deletes=True
    )
    assignments = relationship(
        "DailyAssignment", back_populates="problem",
        cascade="all", passive_deletes=True
    )
