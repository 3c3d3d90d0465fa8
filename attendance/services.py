import logging
from typing import Dict, Iterable, List, Mapping, Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from payroll.calculations import AttendanceEntry, parse_calendar_date

from .models import AttendanceRecord

logger = logging.getLogger(__name__)


def _parse_filter_date(value: Optional[str], field_name: str):
    if not value:
        return None
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise ValidationError({field_name: f"Invalid date '{value}'."})
    return parsed


def _parse_filter_id(value: Optional[str], field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field_name: f"Invalid id '{value}'."})


def apply_record_filters(queryset, params: Mapping[str, str]):
    """Filter attendance rows by inclusive date range, employee and status."""
    start_date = _parse_filter_date(params.get("start_date"), "start_date")
    end_date = _parse_filter_date(params.get("end_date"), "end_date")
    employee_id = _parse_filter_id(params.get("employee_id"), "employee_id")
    status = params.get("status")

    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    if employee_id is not None:
        queryset = queryset.filter(employee_id=employee_id)
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def count_by_status(queryset) -> Dict[str, int]:
    counts = {value: 0 for value, _label in AttendanceRecord.STATUS_CHOICES}
    for status in queryset.values_list("status", flat=True):
        if status in counts:
            counts[status] += 1
    return counts


def bulk_create_records(rows: Iterable[Mapping]) -> List[AttendanceRecord]:
    records = [AttendanceRecord(**row) for row in rows]
    with transaction.atomic():
        created = AttendanceRecord.objects.bulk_create(records)
    logger.info("Created %s attendance records in bulk", len(created))
    return created


def load_attendance_entries(employee_ids=None, start_date=None, end_date=None) -> List[AttendanceEntry]:
    """
    Read stored attendance as payroll engine inputs.

    The date bounds only narrow the query; the payroll engine applies its own
    inclusive period filter on the returned entries.
    """
    queryset = AttendanceRecord.objects.all()
    if employee_ids is not None:
        queryset = queryset.filter(employee_id__in=list(employee_ids))
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return [record.to_payroll_input() for record in queryset.order_by("date", "id")]
