from sqlalchemy.orm import Session
from practice.models import AppSettings
from practice.schemas import SettingsUpdate
from typing import Optional
import logging

logger = logging.getLogger(__name__)

def get_app_settings(db: Session) -> Optional[AppSettings]:
    """Get the stored settings row, if any"""
    return db.query(AppSettings).filter(AppSettings.id == 1).first()

def get_daily_problem_count(db: Session, default: int) -> int:
    """Stored daily count, or ``default`` when nothing was saved yet"""
    row = get_app_settings(db)
    return row.daily_problem_count if row else default

def update_app_settings(db: Session, settings_data: SettingsUpdate) -> AppSettings:
    """Create or update the single settings row"""
    row = get_app_settings(db)
    if row is None:
        row = AppSettings(id=1)
        db.add(row)
    row.daily_problem_count = settings_data.daily_problem_count
    db.flush()
    logger.info("Daily problem count set to %d", row.daily_problem_count)
    return row
