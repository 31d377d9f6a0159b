from .errors import InvalidParameter
from .ports import IProgressRepository
from .services import (
    FISCAL_YEAR_START_MONTH,
    build_goal_detail,
    build_period_dashboard,
    build_user_dashboard,
    compute_goal_progress,
    compute_monthly_breakdown,
    fiscal_year_of,
    fiscal_year_window,
    month_window,
    parse_int_param,
    parse_period_params,
    resolve_period,
    summarize_user_contributions,
)

__all__ = [
    "FISCAL_YEAR_START_MONTH",
    "IProgressRepository",
    "InvalidParameter",
    "build_goal_detail",
    "build_period_dashboard",
    "build_user_dashboard",
    "compute_goal_progress",
    "compute_monthly_breakdown",
    "fiscal_year_of",
    "fiscal_year_window",
    "month_window",
    "parse_int_param",
    "parse_period_params",
    "resolve_period",
    "summarize_user_contributions",
]
