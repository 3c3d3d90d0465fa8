from datetime import date, time
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from attendance.models import AttendanceRecord
from attendance.services import count_by_status, load_attendance_entries
from employees.models import Employee


def _employee(**overrides):
    data = {"first_name": "Lia", "last_name": "Torres", "position": "Clerk", "salary": Decimal("22000.00")}
    data.update(overrides)
    return Employee.objects.create(**data)


class AttendanceRecordModelTests(TestCase):
    def setUp(self):
        self.employee = _employee()

    def test_worked_minutes_single_window(self):
        record = AttendanceRecord(employee=self.employee, date=date(2024, 1, 2), time_in=time(8, 0), time_out=time(17, 30))
        self.assertEqual(record.compute_worked_minutes(), 570)

    def test_worked_minutes_split_shift(self):
        record = AttendanceRecord(
            employee=self.employee,
            date=date(2024, 1, 2),
            time_in=time(7, 0),
            time_out=time(19, 0),
            morning_in=time(8, 0),
            morning_out=time(12, 0),
            afternoon_in=time(13, 0),
            afternoon_out=time(17, 15),
        )
        self.assertTrue(record.is_split_shift)
        self.assertEqual(record.compute_worked_minutes(), 495)

    def test_worked_minutes_missing_times(self):
        record = AttendanceRecord(employee=self.employee, date=date(2024, 1, 2), morning_in=time(8, 0))
        self.assertEqual(record.compute_worked_minutes(), 0)

    def test_payroll_input_defaults_overtime_to_zero(self):
        record = AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 2), status="Late")
        entry = record.to_payroll_input()
        self.assertEqual(entry.employee_id, self.employee.id)
        self.assertEqual(entry.date, date(2024, 1, 2))
        self.assertEqual(entry.status, "Late")
        self.assertEqual(entry.overtime, Decimal("0"))

    def test_load_attendance_entries(self):
        other = _employee(first_name="Nico")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 31), overtime=Decimal("1.50"))
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 2, 1))
        AttendanceRecord.objects.create(employee=other, date=date(2024, 1, 15))

        entries = load_attendance_entries([self.employee.id], date(2024, 1, 1), date(2024, 1, 31))

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].overtime, Decimal("1.50"))
        self.assertEqual(len(load_attendance_entries()), 3)

    def test_count_by_status_is_zero_filled(self):
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 2), status="Present")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 3), status="Present")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 4), status="On Leave")
        counts = count_by_status(AttendanceRecord.objects.all())
        self.assertEqual(
            counts,
            {"Present": 2, "Absent": 0, "Late": 0, "Half-day": 0, "On Leave": 1},
        )


class AttendanceApiTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="hr", password="pass")
        self.client.force_authenticate(self.user)
        self.employee = _employee()
        self.other = _employee(first_name="Nico", last_name="Alvarez")

    def test_create_record(self):
        resp = self.client.post(
            reverse("attendance-record-list"),
            {
                "employee": self.employee.id,
                "date": "2024-01-10",
                "morning_in": "08:00",
                "morning_out": "12:00",
                "afternoon_in": "13:00",
                "afternoon_out": "17:00",
                "status": "Present",
                "overtime": "2.5",
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["worked_minutes"], 480)
        self.assertEqual(resp.data["employee_name"], "Lia Torres")

    def test_create_rejects_unknown_status_and_negative_overtime(self):
        resp = self.client.post(
            reverse("attendance-record-list"),
            {"employee": self.employee.id, "date": "2024-01-10", "status": "Remote", "overtime": "-1"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", resp.data["errors"])
        self.assertIn("overtime", resp.data["errors"])

    def test_create_rejects_inverted_window(self):
        resp = self.client.post(
            reverse("attendance-record-list"),
            {"employee": self.employee.id, "date": "2024-01-10", "time_in": "17:00", "time_out": "08:00"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("time_out", resp.data["errors"])

    def test_bulk_create(self):
        resp = self.client.post(
            reverse("attendance-record-bulk"),
            {
                "records": [
                    {"employee": self.employee.id, "date": "2024-01-10", "status": "Present"},
                    {"employee": self.other.id, "date": "2024-01-10", "status": "Half-day"},
                ]
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["data"]["count"], 2)
        self.assertEqual(AttendanceRecord.objects.count(), 2)

    def test_bulk_create_is_all_or_nothing(self):
        resp = self.client.post(
            reverse("attendance-record-bulk"),
            {
                "records": [
                    {"employee": self.employee.id, "date": "2024-01-10", "status": "Present"},
                    {"employee": self.other.id, "date": "not-a-date", "status": "Present"},
                ]
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_list_filters(self):
        AttendanceRecord.objects.create(employee=self.employee, date=date(2023, 12, 31))
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 1), status="Late")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 31))
        AttendanceRecord.objects.create(employee=self.other, date=date(2024, 1, 15), status="Absent")

        url = reverse("attendance-record-list")
        resp = self.client.get(url, {"start_date": "2024-01-01", "end_date": "2024-01-31"})
        self.assertEqual([row["date"] for row in resp.data], ["2024-01-31", "2024-01-15", "2024-01-01"])

        resp = self.client.get(url, {"employee_id": self.other.id})
        self.assertEqual(len(resp.data), 1)

        resp = self.client.get(url, {"status": "Late"})
        self.assertEqual([row["date"] for row in resp.data], ["2024-01-01"])

        resp = self.client.get(url, {"end_date": "31/01/2024"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_rejects_non_numeric_employee_id(self):
        resp = self.client.get(reverse("attendance-record-list"), {"employee_id": "abc"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data["success"])
        self.assertIn("employee_id", resp.data["errors"])

    def test_summary(self):
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 2), status="Present")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 3), status="Half-day")
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 2, 3), status="Absent")

        resp = self.client.get(reverse("attendance-record-summary"), {"start_date": "2024-01-01", "end_date": "2024-01-31"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["data"]["total"], 2)
        self.assertEqual(resp.data["data"]["counts"]["Half-day"], 1)
        self.assertEqual(resp.data["data"]["counts"]["Absent"], 0)

    def test_summary_uses_validated_filters(self):
        AttendanceRecord.objects.create(employee=self.employee, date=date(2024, 1, 2), status="Present")
        AttendanceRecord.objects.create(employee=self.other, date=date(2024, 1, 2), status="Late")

        url = reverse("attendance-record-summary")
        resp = self.client.get(url, {"employee_id": self.other.id})
        self.assertEqual(resp.data["data"]["total"], 1)
        self.assertEqual(resp.data["data"]["counts"]["Late"], 1)

        resp = self.client.get(url, {"employee_id": "abc"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("employee_id", resp.data["errors"])

        resp = self.client.get(url, {"start_date": "2024-02-01", "end_date": "2024-01-01"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
