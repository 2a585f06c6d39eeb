"""Tests for the streak and readiness aggregates."""

from datetime import timedelta

from conftest import TODAY


def _day(offset):
    return TODAY + timedelta(days=offset)


class TestCurrentStreak:
    def test_scenario_today_in_progress_excluded(self, selector, add_problem, add_assignment):
        a, b, c, d = (add_problem("new") for _ in range(4))
        add_assignment(a, _day(-2), completed=True)
        add_assignment(b, _day(-2), completed=True)
        add_assignment(c, _day(-1), completed=True)
        add_assignment(d, _day(0), completed=False)

        assert selector.current_streak() == 2

    def test_gap_day_breaks_streak(self, selector, add_problem, add_assignment):
        a, b = add_problem("new"), add_problem("new")
        add_assignment(a, _day(-3), completed=True)
        add_assignment(b, _day(-1), completed=True)

        assert selector.current_streak() == 1

    def test_partial_day_breaks_streak(self, selector, add_problem, add_assignment):
        a, b, c = (add_problem("new") for _ in range(3))
        add_assignment(a, _day(-2), completed=True)
        add_assignment(b, _day(-1), completed=True)
        add_assignment(c, _day(-1), completed=False)

        assert selector.current_streak() == 0

    def test_completed_today_not_counted_yet(self, selector, add_problem, add_assignment):
        a = add_problem("new")
        add_assignment(a, _day(0), completed=True)

        assert selector.current_streak() == 0

    def test_no_history(self, selector):
        assert selector.current_streak() == 0

    def test_streak_through_engine(self, selector, clock, add_problem):
        for _ in range(20):
            add_problem("new")
        for _ in range(3):
            for row in selector.get_or_create_today():
                selector.complete(row.problem_id, "okay")
            clock.advance(1)

        assert selector.current_streak() == 3


class TestReadyForReview:
    def test_excludes_new(self, selector, add_problem):
        add_problem("new")
        add_problem("new")
        assert selector.ready_for_review() == 0

    def test_counts_due_reviews(self, selector, add_problem):
        add_problem("struggling", days_ago=3)
        add_problem("struggling", days_ago=2)
        add_problem("okay", days_ago=7)
        add_problem("mastered", days_ago=13)
        add_problem("mastered", days_ago=30)

        assert selector.ready_for_review() == 3

    def test_includes_problems_in_todays_unfinished_set(self, selector, add_problem):
        due = add_problem("okay", days_ago=9)
        rows = selector.get_or_create_today()
        assert [r.problem_id for r in rows] == [due]
        assert not rows[0].completed

        assert selector.ready_for_review() == 1

    def test_completion_clears_review_pressure(self, selector, add_problem):
        due = add_problem("okay", days_ago=9)
        selector.get_or_create_today()
        selector.complete(due, "okay")

        assert selector.ready_for_review() == 0


def test_stats_summary(selector, add_problem, add_assignment):
    add_problem("new")
    add_problem("mastered", days_ago=20)
    done = add_problem("mastered", days_ago=1)
    add_assignment(done, _day(-1), completed=True)

    summary = selector.stats()

    assert summary.total_problems == 3
    assert summary.mastered_problems == 2
    assert summary.current_streak == 1
    assert summary.ready_for_review == 1
