import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework.exceptions import ValidationError

from attendance.services import load_attendance_entries
from employees.models import Employee

from .calculations import (
    ComputedPayroll,
    PayPeriod,
    PayrollRates,
    generate_bulk_payroll,
    generate_payroll_record,
    net_salary,
    parse_calendar_date,
)
from .models import PayrollRecord

logger = logging.getLogger(__name__)

DEFAULT_ROUNDING_SCALE = 2
MONEY_FIELDS = ("base_salary", "overtime_pay", "bonus", "deductions", "tax_withholding")


def _rounding_scale() -> int:
    conf = getattr(settings, "PAYROLL_CALCULATION", None) or {}
    return int(conf.get("ROUNDING_SCALE", DEFAULT_ROUNDING_SCALE))


def round_money(value: Decimal, scale: Optional[int] = None) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if scale is None:
        scale = _rounding_scale()
    quant = Decimal("1").scaleb(-scale)
    return Decimal(value).quantize(quant, rounding=ROUND_HALF_UP)


def resolve_period(period: Optional[str] = None, start_date=None, end_date=None) -> PayPeriod:
    """
    Build a pay period from a ``YYYY-MM`` label and/or explicit bounds.

    Explicit bounds win; a missing label is derived from the start date and
    missing bounds are the first and last day of the labelled month.
    """
    if start_date and end_date:
        return PayPeriod.from_bounds(start_date, end_date, label=period)
    if start_date or end_date:
        raise ValidationError({"detail": "Provide both start_date and end_date, or a period."})
    if period:
        return PayPeriod.from_label(period)
    raise ValidationError({"period": "A period or a start_date/end_date pair is required."})


@dataclass
class PayrollRunResult:
    computed: ComputedPayroll
    record: Optional[PayrollRecord] = None


class PayrollGenerationService:
    def __init__(self, *, period: PayPeriod, rates: Optional[PayrollRates] = None, rounding_scale: Optional[int] = None):
        self.period = period
        self.rates = rates or PayrollRates.from_settings()
        self.rounding_scale = _rounding_scale() if rounding_scale is None else rounding_scale

    def _attendance_for(self, employee_ids: Iterable[int]):
        return load_attendance_entries(
            employee_ids=employee_ids,
            start_date=self.period.start_date,
            end_date=self.period.end_date,
        )

    def compute(
        self,
        employee: Employee,
        *,
        bonus=Decimal("0"),
        extra_deductions=Decimal("0"),
        status: str = PayrollRecord.STATUS_DRAFT,
    ) -> ComputedPayroll:
        return generate_payroll_record(
            employee.to_payroll_input(),
            self._attendance_for([employee.id]),
            self.period.label,
            self.period.start_date,
            self.period.end_date,
            bonus=bonus,
            extra_deductions=extra_deductions,
            status=status,
            rates=self.rates,
        )

    def compute_bulk(self, employee_ids: Optional[Iterable[int]] = None) -> List[ComputedPayroll]:
        employees = Employee.objects.order_by("last_name", "first_name", "id")
        if employee_ids is not None:
            employees = employees.filter(id__in=list(employee_ids))
        infos = [employee.to_payroll_input() for employee in employees]
        return generate_bulk_payroll(
            infos,
            self._attendance_for([info.id for info in infos]),
            self.period.label,
            self.period.start_date,
            self.period.end_date,
            rates=self.rates,
        )

    def build_record(self, computed: ComputedPayroll) -> PayrollRecord:
        """Round the computed components and derive the stored net salary from them."""
        amounts = {name: round_money(getattr(computed, name), self.rounding_scale) for name in MONEY_FIELDS}
        return PayrollRecord(
            employee_id=computed.employee_id,
            period=computed.period,
            start_date=computed.start_date,
            end_date=computed.end_date,
            net_salary=net_salary(*(amounts[name] for name in MONEY_FIELDS)),
            status=computed.status,
            notes=computed.notes,
            **amounts,
        )

    def generate(self, employee: Employee, **options) -> PayrollRunResult:
        computed = self.compute(employee, **options)
        record = self.build_record(computed)
        record.save()
        logger.info("Saved payroll record %s for employee %s (%s)", record.id, employee.id, self.period.label)
        return PayrollRunResult(computed=computed, record=record)

    def generate_bulk(self, employee_ids: Optional[Iterable[int]] = None) -> List[PayrollRunResult]:
        computed_rows = self.compute_bulk(employee_ids)
        records = [self.build_record(computed) for computed in computed_rows]
        with transaction.atomic():
            created = PayrollRecord.objects.bulk_create(records)
        logger.info("Saved %s payroll records for period %s", len(created), self.period.label)
        return [PayrollRunResult(computed=c, record=r) for c, r in zip(computed_rows, created)]


def change_status(record: PayrollRecord, status: str, payment_date=None) -> PayrollRecord:
    if status not in dict(PayrollRecord.STATUS_CHOICES):
        raise ValidationError({"status": f"Unknown payroll status '{status}'."})
    record.status = status
    if payment_date is not None:
        record.payment_date = payment_date
    record.save()
    return record


def _parse_filter_id(value: Optional[str], field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field_name: f"Invalid id '{value}'."})


def apply_record_filters(queryset, params: Mapping[str, str]):
    period = params.get("period")
    start_date = params.get("start_date")
    end_date = params.get("end_date")
    employee_id = _parse_filter_id(params.get("employee_id"), "employee_id")
    status = params.get("status")

    if period:
        queryset = queryset.filter(period=period)
    if start_date:
        parsed = parse_calendar_date(start_date)
        if parsed is None:
            raise ValidationError({"start_date": f"Invalid date '{start_date}'."})
        queryset = queryset.filter(start_date__gte=parsed)
    if end_date:
        parsed = parse_calendar_date(end_date)
        if parsed is None:
            raise ValidationError({"end_date": f"Invalid date '{end_date}'."})
        queryset = queryset.filter(end_date__lte=parsed)
    if employee_id is not None:
        queryset = queryset.filter(employee_id=employee_id)
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def summarize_by_period(queryset) -> List[Dict]:
    """Count and net totals per period, split into paid and not yet paid."""
    zero = Value(Decimal("0.00"), output_field=DecimalField(max_digits=14, decimal_places=2))
    rows = (
        queryset.order_by()
        .values("period")
        .annotate(
            count=Count("id"),
            total=Coalesce(Sum("net_salary"), zero),
            paid=Coalesce(Sum("net_salary", filter=Q(status=PayrollRecord.STATUS_PAID)), zero),
        )
        .order_by("-period")
    )
    return [
        {
            "period": row["period"],
            "count": row["count"],
            "total": row["total"],
            "paid": row["paid"],
            "pending": row["total"] - row["paid"],
        }
        for row in rows
    ]
