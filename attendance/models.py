from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from django.core.validators import MinValueValidator
from django.db import models

from employees.models import Employee
from payroll.calculations import (
    ATTENDANCE_ABSENT,
    ATTENDANCE_HALF_DAY,
    ATTENDANCE_LATE,
    ATTENDANCE_ON_LEAVE,
    ATTENDANCE_PRESENT,
    ATTENDANCE_STATUSES,
    AttendanceEntry,
)


def _minutes_between(start: Optional[time], end: Optional[time]) -> int:
    if not start or not end:
        return 0
    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    return max(int(delta.total_seconds() // 60), 0)


class AttendanceRecord(models.Model):
    """
    One attendance entry per employee and day.

    Split shifts are stored as first-class morning/afternoon windows; a plain
    ``time_in``/``time_out`` pair is used when the day is not split.
    """

    STATUS_PRESENT = ATTENDANCE_PRESENT
    STATUS_ABSENT = ATTENDANCE_ABSENT
    STATUS_LATE = ATTENDANCE_LATE
    STATUS_HALF_DAY = ATTENDANCE_HALF_DAY
    STATUS_ON_LEAVE = ATTENDANCE_ON_LEAVE
    STATUS_CHOICES = [(status, status) for status in ATTENDANCE_STATUSES]

    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="attendance_records")
    date = models.DateField(db_index=True)
    time_in = models.TimeField(blank=True, null=True)
    time_out = models.TimeField(blank=True, null=True)
    morning_in = models.TimeField(blank=True, null=True)
    morning_out = models.TimeField(blank=True, null=True)
    afternoon_in = models.TimeField(blank=True, null=True)
    afternoon_out = models.TimeField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PRESENT, db_index=True)
    overtime = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        blank=True,
        null=True,
        validators=[MinValueValidator(0)],
        help_text="Overtime hours worked on this date.",
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendance_records"
        verbose_name = "Attendance Record"
        verbose_name_plural = "Attendance Records"
        ordering = ["-date", "employee_id"]
        indexes = [
            models.Index(fields=["employee", "date"], name="attendance_employee_date_idx"),
        ]

    @property
    def is_split_shift(self) -> bool:
        return any([self.morning_in, self.morning_out, self.afternoon_in, self.afternoon_out])

    def compute_worked_minutes(self) -> int:
        if self.is_split_shift:
            return _minutes_between(self.morning_in, self.morning_out) + _minutes_between(
                self.afternoon_in, self.afternoon_out
            )
        return _minutes_between(self.time_in, self.time_out)

    def to_payroll_input(self) -> AttendanceEntry:
        return AttendanceEntry(
            employee_id=self.employee_id,
            date=self.date,
            status=self.status,
            overtime=self.overtime or Decimal("0"),
        )

    def __str__(self):
        return f"{self.employee_id} @ {self.date} ({self.status})"
