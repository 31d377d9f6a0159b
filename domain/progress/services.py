"""Progress aggregation for the KPI dashboards.

Everything here works on immutable snapshots (see ``schemas``) and never
touches the database. The ``build_*`` entry points receive the data-access
handle explicitly so callers decide which session backs a request.

Fiscal years start in October: fiscal year 2025 covers
2024-10-01 00:00:00 through 2025-09-30 23:59:59.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidParameter
from .ports import IProgressRepository
from .schemas import (
    ContributionSummary,
    GoalDetail,
    GoalProgress,
    GoalRecord,
    MonthlyBucket,
    PeriodWindow,
    UserDashboard,
    UserGoalContribution,
    UserRecord,
    UserSummary,
    WorkLogRecord,
)

logger = logging.getLogger(__name__)

FISCAL_YEAR_START_MONTH = 10
MONTHS_PER_YEAR = 12
RECENT_LOGS_LIMIT = 5
MIN_FISCAL_YEAR = MINYEAR + 1
MAX_FISCAL_YEAR = MAXYEAR

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


# ============================================================
# FISCAL WINDOWS
# ============================================================

def parse_int_param(name: str, raw) -> Optional[int]:
    """Strict integer parsing for query values; blank or missing gives ``None``."""
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidParameter(name, raw) from None


def _check_fiscal_year(fiscal_year: int, raw=None) -> int:
    # Fiscal year Y starts in calendar year Y-1, which must still be a valid date year
    if not MIN_FISCAL_YEAR <= fiscal_year <= MAX_FISCAL_YEAR:
        raise InvalidParameter(
            "year", fiscal_year if raw is None else raw,
            f"must be between {MIN_FISCAL_YEAR} and {MAX_FISCAL_YEAR}",
        )
    return fiscal_year


def parse_period_params(year=None, month=None) -> Tuple[Optional[int], Optional[int]]:
    """Turn raw ``year``/``month`` query values into integers.

    Missing or blank values come back as ``None``. Anything else that is not
    an integer, a month outside 1-12 or a year whose fiscal window cannot be
    represented raises ``InvalidParameter``.
    """
    fiscal_year = parse_int_param("year", year)
    calendar_month = parse_int_param("month", month)
    if calendar_month is not None and not 1 <= calendar_month <= MONTHS_PER_YEAR:
        raise InvalidParameter("month", month, "must be between 1 and 12")
    if fiscal_year is not None:
        _check_fiscal_year(fiscal_year, year)
    return fiscal_year, calendar_month


def month_window(year: int, month: int) -> PeriodWindow:
    last_day = calendar.monthrange(year, month)[1]
    return PeriodWindow(
        start=datetime(year, month, 1),
        end=datetime(year, month, last_day, 23, 59, 59),
    )


def fiscal_year_window(fiscal_year: int) -> PeriodWindow:
    return PeriodWindow(
        start=datetime(fiscal_year - 1, FISCAL_YEAR_START_MONTH, 1),
        end=datetime(fiscal_year, FISCAL_YEAR_START_MONTH - 1, 30, 23, 59, 59),
    )


def fiscal_year_of(moment: date) -> int:
    """Fiscal year that contains ``moment`` (October onwards belongs to the next one)."""
    if moment.month >= FISCAL_YEAR_START_MONTH:
        return moment.year + 1
    return moment.year


def resolve_period(
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[datetime] = None,
) -> PeriodWindow:
    """Resolve a fiscal year / calendar month selector into a concrete window.

    * year and month: that calendar month, taken from the fiscal year
      (months from October belong to ``year - 1``).
    * year only: the whole fiscal year.
    * otherwise: the current calendar month. A month without a year is ignored.
    """
    if year is not None:
        _check_fiscal_year(year)
        if month is not None:
            calendar_year = year - 1 if month >= FISCAL_YEAR_START_MONTH else year
            return month_window(calendar_year, month)
        return fiscal_year_window(year)

    today = today or datetime.now()
    return month_window(today.year, today.month)


# ============================================================
# PER-GOAL PROGRESS
# ============================================================

def _percentage(amount: int, target: int, rounded: bool) -> float:
    if target <= 0:
        return 0.0
    value = amount / target * 100
    return round(value, 2) if rounded else value


def compute_goal_progress(
    goal: GoalRecord,
    work_logs: Iterable[WorkLogRecord],
    window: Optional[PeriodWindow] = None,
    rounded: bool = True,
) -> GoalProgress:
    """Sum the goal's work logs inside ``window`` and derive the percentage.

    The percentage is not clamped; going over target reports more than 100.
    """
    counted = [
        log for log in work_logs
        if log.goal_id == goal.id and (window is None or window.contains(log.completed_at))
    ]
    current = sum(log.quantity for log in counted)
    return GoalProgress(
        id=goal.id,
        title=goal.title,
        target=goal.target,
        unit=goal.unit,
        current_progress=current,
        percentage=_percentage(current, goal.target, rounded),
        work_logs=counted,
    )


# ============================================================
# MONTHLY BREAKDOWN
# ============================================================

def _month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def compute_monthly_breakdown(
    fiscal_start: date,
    work_logs: Iterable[WorkLogRecord],
) -> List[MonthlyBucket]:
    """Twelve monthly totals starting at ``fiscal_start``'s month.

    Logs completed outside those twelve months are skipped.
    """
    buckets = {}
    year, month = fiscal_start.year, fiscal_start.month
    for _ in range(MONTHS_PER_YEAR):
        buckets[_month_key(year, month)] = 0
        month += 1
        if month > MONTHS_PER_YEAR:
            month = 1
            year += 1

    for log in work_logs:
        key = _month_key(log.completed_at.year, log.completed_at.month)
        if key not in buckets:
            logger.debug("Work log %s (%s) is outside the fiscal year, skipped", log.id, key)
            continue
        buckets[key] += log.quantity

    return [
        MonthlyBucket(month=key, name=MONTH_NAMES[int(key[5:]) - 1], quantity=buckets[key])
        for key in sorted(buckets)
    ]


# ============================================================
# PER-USER CONTRIBUTIONS
# ============================================================

def _newest_first(logs: Iterable[WorkLogRecord]) -> List[WorkLogRecord]:
    return sorted(logs, key=lambda log: (log.completed_at, log.id), reverse=True)


def summarize_user_contributions(
    user: UserRecord,
    goals: Sequence[GoalRecord],
    work_logs: Iterable[WorkLogRecord],
) -> UserDashboard:
    """All-time contribution of ``user`` to each goal they logged work on.

    ``percentageOfTotalTarget`` compares the user's total with the goal's
    whole target, not with the user's own assignment.
    """
    own_logs = [log for log in work_logs if log.author_id == user.id]

    contributed = defaultdict(int)
    for log in own_logs:
        contributed[log.goal_id] += log.quantity

    goals_by_id = {goal.id: goal for goal in goals}
    missing = set(contributed) - set(goals_by_id)
    if missing:
        logger.warning("User %s has work logs on unknown goals %s", user.id, sorted(missing))

    goal_progress = []
    for goal_id in sorted(set(contributed) & set(goals_by_id)):
        goal = goals_by_id[goal_id]
        amount = contributed[goal_id]
        goal_progress.append(UserGoalContribution(
            goal_id=goal.id,
            goal_title=goal.title,
            goal_target=goal.target,
            unit=goal.unit,
            user_contribution=amount,
            percentage_of_total_target=_percentage(amount, goal.target, rounded=True),
        ))

    return UserDashboard(
        user=UserSummary(id=user.id, name=user.name, email=user.email),
        goal_progress=goal_progress,
        recent_logs=_newest_first(own_logs)[:RECENT_LOGS_LIMIT],
        summary=ContributionSummary(
            total_logs=len(own_logs),
            total_units_contributed=sum(contributed.values()),
            involved_goals_count=len(contributed),
        ),
    )


# ============================================================
# DASHBOARD ENTRY POINTS
# ============================================================

def build_period_dashboard(
    repo: IProgressRepository,
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[datetime] = None,
) -> List[GoalProgress]:
    """Progress of every goal within the resolved period, rounded to 2 decimals."""
    window = resolve_period(year, month, today)
    logs_by_goal = defaultdict(list)
    for log in repo.list_work_logs(start=window.start, end=window.end):
        logs_by_goal[log.goal_id].append(log)

    logger.debug("Period dashboard %s - %s", window.start, window.end)
    return [
        compute_goal_progress(goal, logs_by_goal.get(goal.id, []), window)
        for goal in repo.list_goals()
    ]


def build_goal_detail(
    repo: IProgressRepository,
    goal_id: int,
    year: Optional[int] = None,
) -> Optional[GoalDetail]:
    """One goal scoped to a fiscal year, with its monthly chart.

    Without ``year`` the fiscal year containing the goal's start date is used.
    The percentage is left unrounded for the presentation layer to format.
    """
    goal = repo.get_goal(goal_id)
    if goal is None:
        return None

    if year is not None:
        _check_fiscal_year(year)
    fiscal_year = year if year is not None else fiscal_year_of(goal.start_date)
    window = fiscal_year_window(fiscal_year)
    work_logs = _newest_first(repo.list_work_logs(start=window.start, end=window.end, goal_id=goal.id))

    progress = compute_goal_progress(goal, work_logs, window, rounded=False)
    return GoalDetail(
        **progress.model_dump(),
        start_date=goal.start_date,
        end_date=goal.end_date,
        fiscal_year=fiscal_year,
        monthly_chart_data=compute_monthly_breakdown(window.start.date(), work_logs),
    )


def build_user_dashboard(repo: IProgressRepository, user_id: int) -> Optional[UserDashboard]:
    user = repo.get_user(user_id)
    if user is None:
        return None

    work_logs = repo.list_work_logs(author_id=user.id)
    involved_ids = sorted({log.goal_id for log in work_logs})
    goals = repo.goals_by_ids(involved_ids) if involved_ids else []
    return summarize_user_contributions(user, goals, work_logs)
