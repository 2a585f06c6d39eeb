from sqlalchemy import Column, Integer, CheckConstraint
from practice.database import Base

class AppSettings(Base):
    """Single-row user preferences"""
    __tablename__ = "app_settings"
    __table_args__ = (
        CheckConstraint("id = 1", name="ck_settings_single_row"),
        CheckConstraint("daily_problem_count BETWEEN 3 AND 10", name="ck_settings_daily_count"),
    )

    id = Column(Integer, primary_key=True, default=1)
    daily_problem_count = Column(Integer, nullable=False, default=5)
