"""
Payroll-from-attendance calculation engine.

Pure functions only: no database access, no shared state. Inputs are
normalised once into the value types below; every calculator works on
``Decimal`` and leaves rounding to the caller.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional, Union

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, None]

ATTENDANCE_PRESENT = "Present"
ATTENDANCE_ABSENT = "Absent"
ATTENDANCE_LATE = "Late"
ATTENDANCE_HALF_DAY = "Half-day"
ATTENDANCE_ON_LEAVE = "On Leave"
ATTENDANCE_STATUSES = (
    ATTENDANCE_PRESENT,
    ATTENDANCE_ABSENT,
    ATTENDANCE_LATE,
    ATTENDANCE_HALF_DAY,
    ATTENDANCE_ON_LEAVE,
)

# Lateness is tracked but not penalised.
PAID_DAY_FRACTIONS = {
    ATTENDANCE_PRESENT: Decimal("1"),
    ATTENDANCE_LATE: Decimal("1"),
    ATTENDANCE_HALF_DAY: Decimal("0.5"),
    ATTENDANCE_ABSENT: Decimal("0"),
    ATTENDANCE_ON_LEAVE: Decimal("0"),
}

EMPLOYEE_INACTIVE = "Inactive"

PAYROLL_DRAFT = "Draft"
PAYROLL_PENDING = "Pending"
PAYROLL_APPROVED = "Approved"
PAYROLL_PAID = "Paid"
PAYROLL_STATUSES = (PAYROLL_DRAFT, PAYROLL_PENDING, PAYROLL_APPROVED, PAYROLL_PAID)

DEFAULT_WORKING_DAYS_PER_MONTH = 22
DEFAULT_HOURS_PER_DAY = 8
DEFAULT_OVERTIME_PREMIUM = Decimal("1.25")
DEFAULT_DEDUCTION_RATE = Decimal("0.045")
DEFAULT_TAX_RATE = Decimal("0.10")

ZERO = Decimal("0")


def _to_decimal(value, default=ZERO) -> Decimal:
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default


def _first(data: Mapping[str, Any], *keys, default=None):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def parse_calendar_date(value: DateLike) -> Optional[date]:
    """Return the calendar date of ``value`` or ``None`` when it cannot be parsed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = parse_date(text) or parse_datetime(text)
    except ValueError:
        return None
    if isinstance(parsed, datetime):
        return parsed.date()
    return parsed


@dataclass(frozen=True)
class PayrollRates:
    working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH
    hours_per_day: int = DEFAULT_HOURS_PER_DAY
    overtime_premium: Decimal = DEFAULT_OVERTIME_PREMIUM
    deduction_rate: Decimal = DEFAULT_DEDUCTION_RATE
    tax_rate: Decimal = DEFAULT_TAX_RATE

    @classmethod
    def from_settings(cls) -> "PayrollRates":
        from django.conf import settings

        conf = getattr(settings, "PAYROLL_CALCULATION", None) or {}
        return cls(
            working_days_per_month=int(conf.get("WORKING_DAYS_PER_MONTH", DEFAULT_WORKING_DAYS_PER_MONTH)),
            hours_per_day=int(conf.get("HOURS_PER_DAY", DEFAULT_HOURS_PER_DAY)),
            overtime_premium=_to_decimal(conf.get("OVERTIME_PREMIUM"), DEFAULT_OVERTIME_PREMIUM),
            deduction_rate=_to_decimal(conf.get("DEDUCTION_RATE"), DEFAULT_DEDUCTION_RATE),
            tax_rate=_to_decimal(conf.get("TAX_RATE"), DEFAULT_TAX_RATE),
        )


@dataclass(frozen=True)
class AttendanceEntry:
    employee_id: Optional[int]
    date: DateLike
    status: str
    overtime: Decimal = ZERO

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AttendanceEntry":
        employee_id = _first(data, "employee_id", "employeeId")
        return cls(
            employee_id=int(employee_id) if employee_id is not None else None,
            date=_first(data, "date"),
            status=_first(data, "status", default=""),
            overtime=_to_decimal(_first(data, "overtime")),
        )

    @property
    def calendar_date(self) -> Optional[date]:
        return parse_calendar_date(self.date)


@dataclass(frozen=True)
class EmployeeInfo:
    id: int
    salary: Decimal = ZERO
    status: str = "Active"
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmployeeInfo":
        return cls(
            id=int(_first(data, "id")),
            salary=_to_decimal(_first(data, "salary")),
            status=_first(data, "status", default="Active"),
            first_name=_first(data, "first_name", "firstName", default=""),
            last_name=_first(data, "last_name", "lastName", default=""),
        )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in [self.first_name, self.last_name] if part)


@dataclass(frozen=True)
class PayPeriod:
    start_date: date
    end_date: date
    label: str

    @classmethod
    def from_bounds(cls, start_date: DateLike, end_date: DateLike, label: Optional[str] = None) -> "PayPeriod":
        start, end = _resolve_bounds(start_date, end_date)
        return cls(start_date=start, end_date=end, label=label or start.strftime("%Y-%m"))

    @classmethod
    def for_month(cls, year: int, month: int) -> "PayPeriod":
        last_day = calendar.monthrange(year, month)[1]
        return cls(
            start_date=date(year, month, 1),
            end_date=date(year, month, last_day),
            label=f"{year:04d}-{month:02d}",
        )

    @classmethod
    def from_label(cls, label: str) -> "PayPeriod":
        try:
            year, month = (int(part) for part in str(label).split("-"))
            return cls.for_month(year, month)
        except (TypeError, ValueError):
            raise ValidationError({"period": f"Invalid period '{label}', expected YYYY-MM."})

    def contains(self, value: DateLike) -> bool:
        day = parse_calendar_date(value)
        return day is not None and self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class ComputedPayroll:
    employee_id: int
    period: str
    start_date: date
    end_date: date
    base_salary: Decimal
    overtime_pay: Decimal
    bonus: Decimal
    deductions: Decimal
    tax_withholding: Decimal
    net_salary: Decimal
    status: str = PAYROLL_DRAFT
    notes: str = ""


def _resolve_bounds(start_date: DateLike, end_date: DateLike):
    start = parse_calendar_date(start_date)
    end = parse_calendar_date(end_date)
    errors = {}
    if start is None:
        errors["start_date"] = f"Invalid start date '{start_date}'."
    if end is None:
        errors["end_date"] = f"Invalid end date '{end_date}'."
    if errors:
        raise ValidationError(errors)
    if start > end:
        raise ValidationError({"end_date": "End date must be on or after the start date."})
    return start, end


def _entries(records: Iterable[Union[AttendanceEntry, Mapping[str, Any]]]) -> List[AttendanceEntry]:
    return [r if isinstance(r, AttendanceEntry) else AttendanceEntry.from_mapping(r) for r in records]


def daily_rate(monthly_salary, working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH) -> Decimal:
    return _to_decimal(monthly_salary) / _to_decimal(working_days_per_month)


def hourly_rate(daily, hours_per_day: int = DEFAULT_HOURS_PER_DAY) -> Decimal:
    return _to_decimal(daily) / _to_decimal(hours_per_day)


def in_period(records, start_date: DateLike, end_date: DateLike) -> List[AttendanceEntry]:
    """
    Keep the records dated within the inclusive ``[start_date, end_date]`` interval.

    Records whose date cannot be parsed are dropped with a warning.
    """
    period = PayPeriod.from_bounds(start_date, end_date)
    selected = []
    for record in _entries(records):
        day = record.calendar_date
        if day is None:
            logger.warning(
                "Excluding attendance record for employee %s with unparsable date %r",
                record.employee_id,
                record.date,
            )
            continue
        if period.contains(day):
            selected.append(record)
    return selected


def paid_day_fraction(status: str) -> Decimal:
    fraction = PAID_DAY_FRACTIONS.get(status)
    if fraction is None:
        logger.warning("Unknown attendance status %r counted as unpaid", status)
        return ZERO
    return fraction


def base_salary(attendance, daily, start_date: DateLike, end_date: DateLike) -> Decimal:
    # Same-day duplicates are each counted.
    days = sum((paid_day_fraction(r.status) for r in in_period(attendance, start_date, end_date)), ZERO)
    return days * _to_decimal(daily)


def overtime_pay(
    attendance,
    hourly,
    start_date: DateLike,
    end_date: DateLike,
    overtime_premium=DEFAULT_OVERTIME_PREMIUM,
) -> Decimal:
    hours = sum((_to_decimal(r.overtime) for r in in_period(attendance, start_date, end_date)), ZERO)
    return hours * _to_decimal(hourly) * _to_decimal(overtime_premium)


def default_deductions(base, rate=DEFAULT_DEDUCTION_RATE) -> Decimal:
    return _to_decimal(base) * _to_decimal(rate)


def tax_withholding(base, overtime, bonus, rate=DEFAULT_TAX_RATE) -> Decimal:
    taxable = _to_decimal(base) + _to_decimal(overtime) + _to_decimal(bonus)
    return taxable * _to_decimal(rate)


def net_salary(base, overtime, bonus, deductions, tax) -> Decimal:
    return (
        _to_decimal(base)
        + _to_decimal(overtime)
        + _to_decimal(bonus)
        - _to_decimal(deductions)
        - _to_decimal(tax)
    )


def generate_payroll_record(
    employee: Union[EmployeeInfo, Mapping[str, Any]],
    attendance,
    period: str,
    start_date: DateLike,
    end_date: DateLike,
    bonus=ZERO,
    extra_deductions=ZERO,
    status: str = PAYROLL_DRAFT,
    rates: Optional[PayrollRates] = None,
) -> ComputedPayroll:
    if not isinstance(employee, EmployeeInfo):
        employee = EmployeeInfo.from_mapping(employee)
    rates = rates or PayrollRates()
    start, end = _resolve_bounds(start_date, end_date)
    records = _entries(attendance)
    bonus = _to_decimal(bonus)

    daily = daily_rate(employee.salary, rates.working_days_per_month)
    hourly = hourly_rate(daily, rates.hours_per_day)

    base = base_salary(records, daily, start, end)
    overtime = overtime_pay(records, hourly, start, end, rates.overtime_premium)
    deductions = default_deductions(base, rates.deduction_rate) + _to_decimal(extra_deductions)
    tax = tax_withholding(base, overtime, bonus, rates.tax_rate)

    logger.debug(
        "Computed payroll for employee %s period %s: base=%s overtime=%s",
        employee.id,
        period,
        base,
        overtime,
    )
    return ComputedPayroll(
        employee_id=employee.id,
        period=period,
        start_date=start,
        end_date=end,
        base_salary=base,
        overtime_pay=overtime,
        bonus=bonus,
        deductions=deductions,
        tax_withholding=tax,
        net_salary=net_salary(base, overtime, bonus, deductions, tax),
        status=status,
        notes=f"Auto-generated payroll for {employee.full_name} ({period})",
    )


def generate_bulk_payroll(
    employees,
    attendance,
    period: str,
    start_date: DateLike,
    end_date: DateLike,
    rates: Optional[PayrollRates] = None,
) -> List[ComputedPayroll]:
    """
    Run the payroll pipeline for every employee that is not inactive.

    Each employee only sees the attendance rows carrying their own id; the
    output keeps the input order of ``employees``.
    """
    records = _entries(attendance)
    results = []
    for employee in employees:
        if not isinstance(employee, EmployeeInfo):
            employee = EmployeeInfo.from_mapping(employee)
        if employee.status == EMPLOYEE_INACTIVE:
            continue
        own = [r for r in records if r.employee_id == employee.id]
        results.append(generate_payroll_record(employee, own, period, start_date, end_date, rates=rates))
    return results
