from practice.crud.problem import (
    create_problem,
    get_problem,
    require_problem,
    list_problems,
    update_problem,
    delete_problem,
    get_eligible_problems,
    count_due_for_review,
    count_problems
)
from practice.crud.attempt import record_attempt, get_attempts, count_attempts_by_problem
from practice.crud.daily_assignment import (
    get_assignments_for_date,
    get_assignment,
    add_assignments,
    delete_assignment,
    delete_pending_assignments,
    get_completion_by_date
)
from practice.crud.app_settings import (
    get_app_settings,
    get_daily_problem_count,
    update_app_settings
)

__all__ = [
    "create_problem",
    "get_problem",
    "require_problem",
    "list_problems",
    "update_problem",
    "delete_problem",
    "get_eligible_problems",
    "count_due_for_review",
    "count_problems",
    "record_attempt",
    "get_attempts",
    "count_attempts_by_problem",
    "get_assignments_for_date",
    "get_assignment",
    "add_assignments",
    "delete_assignment",
    "delete_pending_assignments",
    "get_completion_by_date",
    "get_app_settings",
    "get_daily_problem_count",
    "update_app_settings",
]
