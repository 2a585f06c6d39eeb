from practice.models.problem import Problem
from practice.models.attempt import Attempt
from practice.models.daily_assignment import DailyAssignment
from practice.models.app_settings import AppSettings

__all__ = [
    "Problem",
    "Attempt",
    "DailyAssignment",
    "AppSettings"
]
