"""Monthly revenue / cost / margin projections.

Everything here is a pure function over ``ProjectSnapshot`` objects so the
routers only have to load rows and hand them over.
"""
import calendar
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from src.config import DEFAULT_DAILY_HOURS, MONTHLY_HOURS, PROJECTION_MONTHS
from src.projects.models import FixedCostType, PaymentType
from src.projections.schemas import (
    AssignmentSnapshot,
    MonthFigures,
    MonthProjection,
    ProjectCosts,
    ProjectSnapshot,
)
from src.time_logs.models import TimeLogType

ZERO = Decimal("0")
NOT_COMPUTED = "—"


def round_amount(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def count_working_days(start: date, end: date) -> int:
    """Count Monday–Friday days in ``[start, end]``."""
    count = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def working_days_in_month(year: int, month: int) -> int:
    return count_working_days(*month_bounds(year, month))


def overlaps_month(start: date | None, end: date | None, year: int, month: int) -> bool:
    month_start, month_end = month_bounds(year, month)
    start = start or date.min
    end = end or date.max
    return start <= month_end and end >= month_start


def duration_months(start: date | None, end: date | None) -> int:
    """Inclusive number of calendar months a dated window touches (at least 1)."""
    if not start or not end:
        return 1
    months = (end.year - start.year) * 12 + (end.month - start.month) + 1
    return max(1, months)


def hourly_rate(monthly_cost: Decimal | None) -> Decimal:
    return (monthly_cost or ZERO) / Decimal(MONTHLY_HOURS)


def _daily_hours(assignment: AssignmentSnapshot) -> Decimal:
    if assignment.daily_hours is None:
        return Decimal(DEFAULT_DAILY_HOURS)
    return assignment.daily_hours


def _assignment_rate(assignment: AssignmentSnapshot) -> Decimal:
    return hourly_rate(assignment.user.monthly_cost if assignment.user else None)


# Only members whose own window (falling back to the project dates) touches the month count.
def _active_assignments(project: ProjectSnapshot, year: int, month: int) -> list[AssignmentSnapshot]:
    return [
        a for a in project.assignments
        if overlaps_month(a.start_date or project.start_date, a.end_date or project.end_date, year, month)
    ]


def _work_logs(project: ProjectSnapshot):
    return [log for log in project.time_logs if log.type == TimeLogType.WORK]


def monthly_revenue(project: ProjectSnapshot, year: int, month: int) -> Decimal:
    price = project.total_project_price or ZERO

    if project.payment_type == PaymentType.FIXED:
        return price / duration_months(project.start_date, project.end_date)

    # HOURLY: price is the hourly rate
    logs = [
        log for log in _work_logs(project)
        if log.date.year == year and log.date.month == month
    ]
    if logs:
        return sum((log.hours for log in logs), ZERO) * price

    daily_hours = sum((_daily_hours(a) for a in _active_assignments(project, year, month)), ZERO)
    return working_days_in_month(year, month) * daily_hours * price


def monthly_labor_cost(project: ProjectSnapshot, year: int, month: int) -> Decimal:
    working_days = working_days_in_month(year, month)
    return sum(
        (working_days * _daily_hours(a) * _assignment_rate(a) for a in _active_assignments(project, year, month)),
        ZERO,
    )


def monthly_fixed_cost(project: ProjectSnapshot, year: int, month: int) -> Decimal:
    fixed = project.total_fixed_cost or ZERO
    if project.fixed_cost_type == FixedCostType.MONTHLY:
        return fixed
    # TOTAL, or an untyped amount: spread over the project duration
    return fixed / duration_months(project.start_date, project.end_date)


def project_month_figures(project: ProjectSnapshot, year: int, month: int) -> MonthFigures | None:
    if not overlaps_month(project.start_date, project.end_date, year, month):
        return None
    return MonthFigures(
        revenue=monthly_revenue(project, year, month),
        labor_cost=monthly_labor_cost(project, year, month),
        fixed_cost=monthly_fixed_cost(project, year, month),
    )


def projection_window(today: date, months: int = PROJECTION_MONTHS) -> list[tuple[int, int]]:
    window = []
    for offset in range(months):
        total = today.month - 1 + offset
        window.append((today.year + total // 12, total % 12 + 1))
    return window


def build_projections(
    projects: Iterable[ProjectSnapshot], today: date, months: int = PROJECTION_MONTHS
) -> list[MonthProjection]:
    projects = list(projects)
    result = []

    for year, month in projection_window(today, months):
        revenue = ZERO
        cost = ZERO
        for project in projects:
            figures = project_month_figures(project, year, month)
            if figures is None:
                continue
            revenue += figures.revenue
            cost += figures.cost

        result.append(MonthProjection(
            month=f"{calendar.month_abbr[month]} {year}",
            year=year,
            month_index=month - 1,
            revenue=round_amount(revenue),
            cost=round_amount(cost),
            margin=round_amount(revenue - cost),
        ))

    return result


def estimated_monthly_revenue(projects: Iterable[ProjectSnapshot], today: date) -> int:
    total = ZERO
    for project in projects:
        if overlaps_month(project.start_date, project.end_date, today.year, today.month):
            total += monthly_revenue(project, today.year, today.month)
    return round_amount(total)


def format_roi(margin: Decimal, revenue: Decimal) -> str:
    if revenue <= 0:
        return "0.0"
    roi = (margin / revenue * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{roi:.1f}"


def compute_project_costs(project: ProjectSnapshot, today: date) -> ProjectCosts:
    """Whole-project cost view.

    Effective labor comes from the WORK logs dated inside the project window;
    estimated labor assumes every member works their daily hours on every
    working day of their assignment.
    """
    window_start = project.start_date or date.min
    window_end = project.end_date or date.max
    valid_logs = [log for log in _work_logs(project) if window_start <= log.date <= window_end]

    rates = {a.user_id: _assignment_rate(a) for a in project.assignments}
    effective_labor = sum((log.hours * rates.get(log.user_id, ZERO) for log in valid_logs), ZERO)

    estimated_labor = ZERO
    for a in project.assignments:
        start = a.start_date or project.start_date or today
        end = a.end_date or project.end_date or today
        estimated_labor += count_working_days(start, end) * _daily_hours(a) * _assignment_rate(a)

    fixed_costs = project.total_fixed_cost or ZERO
    if project.fixed_cost_type == FixedCostType.MONTHLY:
        fixed_costs *= duration_months(project.start_date, project.end_date)

    price = project.total_project_price or ZERO
    if project.payment_type == PaymentType.FIXED:
        revenue = price
    else:
        revenue = sum((log.hours for log in valid_logs), ZERO) * price

    effective_cost = effective_labor + fixed_costs
    estimated_cost = estimated_labor + fixed_costs
    effective_margin = revenue - effective_cost
    estimated_margin = revenue - estimated_cost

    return ProjectCosts(
        revenue=revenue,
        effective_labor=effective_labor,
        estimated_labor=estimated_labor,
        fixed_costs=fixed_costs,
        effective_cost=effective_cost,
        estimated_cost=estimated_cost,
        effective_margin=effective_margin,
        estimated_margin=estimated_margin,
        effective_roi=format_roi(effective_margin, revenue),
        estimated_roi=format_roi(estimated_margin, revenue),
    )


def format_duration(start: date | None, end: date | None) -> str:
    if not start or not end:
        return NOT_COMPUTED
    days = (end - start).days
    if days <= 0:
        return NOT_COMPUTED

    months, rest = divmod(days, 30)
    parts = []
    if months:
        parts.append(f"{months} month{'s' if months > 1 else ''}")
    if rest or not months:
        parts.append(f"{rest} day{'s' if rest > 1 else ''}")
    return " ".join(parts)
