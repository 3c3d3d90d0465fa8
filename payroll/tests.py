from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APITestCase

from attendance.models import AttendanceRecord
from employees.models import Employee
from payroll.calculations import (
    AttendanceEntry,
    EmployeeInfo,
    PayPeriod,
    PayrollRates,
    base_salary,
    daily_rate,
    default_deductions,
    generate_bulk_payroll,
    generate_payroll_record,
    hourly_rate,
    in_period,
    net_salary,
    overtime_pay,
    paid_day_fraction,
    tax_withholding,
)
from payroll.models import PayrollRecord
from payroll.services import PayrollGenerationService, resolve_period, round_money, summarize_by_period


def _january_attendance(employee_id=1):
    """20 present days, one half day and one absence in January 2024."""
    start = date(2024, 1, 1)
    records = [
        AttendanceEntry(employee_id=employee_id, date=(start + timedelta(days=i)).isoformat(), status="Present")
        for i in range(20)
    ]
    records.append(AttendanceEntry(employee_id=employee_id, date="2024-01-21", status="Half-day"))
    records.append(AttendanceEntry(employee_id=employee_id, date="2024-01-22", status="Absent"))
    return records


class PayrollCalculationTests(SimpleTestCase):
    start = "2024-01-01"
    end = "2024-01-31"

    def test_rates_from_monthly_salary(self):
        daily = daily_rate(22000)
        self.assertEqual(daily, Decimal("1000"))
        self.assertEqual(hourly_rate(daily), Decimal("125"))
        self.assertEqual(daily_rate(22000, working_days_per_month=20), Decimal("1100"))
        self.assertEqual(hourly_rate(Decimal("1000"), hours_per_day=10), Decimal("100"))

    def test_zero_or_missing_salary_gives_zero_rate(self):
        self.assertEqual(daily_rate(0), Decimal("0"))
        self.assertEqual(daily_rate(None), Decimal("0"))
        self.assertEqual(hourly_rate(daily_rate(None)), Decimal("0"))

    def test_base_salary_maps_statuses_to_paid_fractions(self):
        self.assertEqual(base_salary(_january_attendance(), Decimal("1000"), self.start, self.end), Decimal("20500"))

    def test_status_fractions(self):
        self.assertEqual(paid_day_fraction("Present"), Decimal("1"))
        self.assertEqual(paid_day_fraction("Late"), Decimal("1"))
        self.assertEqual(paid_day_fraction("Half-day"), Decimal("0.5"))
        self.assertEqual(paid_day_fraction("Absent"), Decimal("0"))
        self.assertEqual(paid_day_fraction("On Leave"), Decimal("0"))

    def test_single_record_contributions(self):
        for status_value, expected in [
            ("Half-day", Decimal("400")),
            ("Absent", Decimal("0")),
            ("On Leave", Decimal("0")),
            ("Late", Decimal("800")),
        ]:
            records = [AttendanceEntry(employee_id=1, date="2024-01-10", status=status_value)]
            self.assertEqual(base_salary(records, Decimal("800"), self.start, self.end), expected, status_value)

    def test_unknown_status_is_unpaid_and_logged(self):
        records = [AttendanceEntry(employee_id=1, date="2024-01-10", status="Remote")]
        with self.assertLogs("payroll.calculations", level="WARNING") as logs:
            self.assertEqual(base_salary(records, Decimal("1000"), self.start, self.end), Decimal("0"))
        self.assertIn("Remote", logs.output[0])

    def test_overtime_pay_applies_premium(self):
        records = _january_attendance()
        records.append(AttendanceEntry(employee_id=1, date="2024-01-15", status="Present", overtime=Decimal("3")))
        self.assertEqual(overtime_pay(records, Decimal("125"), self.start, self.end), Decimal("468.75"))
        self.assertEqual(
            overtime_pay(records, Decimal("125"), self.start, self.end, overtime_premium=Decimal("2")),
            Decimal("750"),
        )

    def test_overtime_is_not_bounded(self):
        records = [AttendanceEntry(employee_id=1, date="2024-01-05", status="Present", overtime=Decimal("40"))]
        self.assertEqual(overtime_pay(records, Decimal("10"), self.start, self.end), Decimal("500"))

    def test_missing_overtime_counts_as_zero(self):
        records = [AttendanceEntry.from_mapping({"employeeId": 1, "date": "2024-01-05", "status": "Present", "overtime": None})]
        self.assertEqual(records[0].overtime, Decimal("0"))
        self.assertEqual(overtime_pay(records, Decimal("125"), self.start, self.end), Decimal("0"))

    def test_deductions_tax_and_net(self):
        deductions = default_deductions(Decimal("20500"))
        tax = tax_withholding(Decimal("20500"), Decimal("468.75"), Decimal("0"))
        self.assertEqual(deductions, Decimal("922.5"))
        self.assertEqual(tax, Decimal("2096.875"))
        self.assertEqual(
            net_salary(Decimal("20500"), Decimal("468.75"), Decimal("0"), deductions, tax),
            Decimal("17949.375"),
        )

    def test_rates_can_be_overridden_per_call(self):
        self.assertEqual(default_deductions(Decimal("1000"), rate=Decimal("0.1")), Decimal("100"))
        self.assertEqual(tax_withholding(100, 50, 50, rate=Decimal("0.2")), Decimal("40"))

    def test_net_salary_is_not_clamped(self):
        self.assertEqual(net_salary(100, 0, 0, 500, 0), Decimal("-400"))

    def test_net_salary_identity(self):
        cases = [
            (Decimal("1000.10"), Decimal("20.05"), Decimal("5"), Decimal("45.0045"), Decimal("102.515")),
            (Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0")),
            (Decimal("-50"), Decimal("10"), Decimal("0"), Decimal("1"), Decimal("2")),
        ]
        for base, ot, bonus, ded, tax in cases:
            self.assertEqual(net_salary(base, ot, bonus, ded, tax), base + ot + bonus - ded - tax)

    def test_period_bounds_are_inclusive(self):
        records = [
            AttendanceEntry(employee_id=1, date="2023-12-31", status="Present"),
            AttendanceEntry(employee_id=1, date="2024-01-01", status="Present"),
            AttendanceEntry(employee_id=1, date="2024-01-31", status="Present"),
            AttendanceEntry(employee_id=1, date="2024-02-01", status="Present"),
        ]
        selected = in_period(records, self.start, self.end)
        self.assertEqual([r.date for r in selected], ["2024-01-01", "2024-01-31"])

    def test_record_after_end_date_is_not_paid(self):
        records = [AttendanceEntry(employee_id=1, date="2024-02-01", status="Present")]
        self.assertEqual(base_salary(records, Decimal("1000"), self.start, self.end), Decimal("0"))

    def test_time_of_day_is_ignored(self):
        records = [
            AttendanceEntry(employee_id=1, date="2024-01-31T18:30:00", status="Present"),
            AttendanceEntry(employee_id=1, date=date(2024, 1, 15), status="Present"),
        ]
        self.assertEqual(len(in_period(records, "2024-01-01T09:00:00", self.end)), 2)

    def test_unparsable_dates_are_excluded_and_logged(self):
        records = [
            AttendanceEntry(employee_id=1, date="not-a-date", status="Present"),
            AttendanceEntry(employee_id=1, date="2024-02-30", status="Present"),
            AttendanceEntry(employee_id=1, date=None, status="Present"),
            AttendanceEntry(employee_id=1, date="2024-01-10", status="Present"),
        ]
        with self.assertLogs("payroll.calculations", level="WARNING") as logs:
            selected = in_period(records, self.start, self.end)
        self.assertEqual(len(selected), 1)
        self.assertEqual(len(logs.output), 3)

    def test_invalid_period_bounds_raise(self):
        with self.assertRaises(ValidationError):
            in_period([], "garbage", self.end)
        with self.assertRaises(ValidationError):
            in_period([], "2024-02-01", "2024-01-01")

    def test_empty_attendance_yields_zero(self):
        self.assertEqual(base_salary([], Decimal("1234"), self.start, self.end), Decimal("0"))
        self.assertEqual(overtime_pay([], Decimal("99"), self.start, self.end), Decimal("0"))

    def test_same_day_records_are_not_deduplicated(self):
        records = [
            AttendanceEntry(employee_id=1, date="2024-01-10", status="Present"),
            AttendanceEntry(employee_id=1, date="2024-01-10", status="Present"),
        ]
        self.assertEqual(base_salary(records, Decimal("100"), self.start, self.end), Decimal("200"))

    def test_generate_payroll_record(self):
        employee = EmployeeInfo(id=7, salary=Decimal("22000"), first_name="Ana", last_name="Cruz")
        records = _january_attendance(employee_id=7)
        records.append(AttendanceEntry(employee_id=7, date="2024-01-15", status="Present", overtime=Decimal("3")))

        result = generate_payroll_record(employee, records, "2024-01", self.start, self.end)

        self.assertEqual(result.employee_id, 7)
        self.assertEqual(result.period, "2024-01")
        self.assertEqual(result.start_date, date(2024, 1, 1))
        self.assertEqual(result.end_date, date(2024, 1, 31))
        self.assertEqual(result.base_salary, Decimal("21500"))
        self.assertEqual(result.overtime_pay, Decimal("468.75"))
        self.assertEqual(result.bonus, Decimal("0"))
        self.assertEqual(result.deductions, Decimal("967.5"))
        self.assertEqual(result.tax_withholding, Decimal("2196.875"))
        self.assertEqual(result.net_salary, Decimal("18804.375"))
        self.assertEqual(result.status, "Draft")
        self.assertEqual(result.notes, "Auto-generated payroll for Ana Cruz (2024-01)")

    def test_generate_payroll_record_with_bonus_and_extra_deductions(self):
        employee = EmployeeInfo(id=1, salary=Decimal("22000"))
        result = generate_payroll_record(
            employee,
            _january_attendance(),
            "2024-01",
            self.start,
            self.end,
            bonus=Decimal("1000"),
            extra_deductions=Decimal("77.5"),
            status="Approved",
        )
        self.assertEqual(result.deductions, Decimal("1000"))
        self.assertEqual(result.tax_withholding, Decimal("2150"))
        self.assertEqual(result.net_salary, Decimal("20500") + Decimal("1000") - Decimal("1000") - Decimal("2150"))
        self.assertEqual(result.status, "Approved")

    def test_generate_payroll_record_uses_rates(self):
        rates = PayrollRates(working_days_per_month=20, tax_rate=Decimal("0"), deduction_rate=Decimal("0"))
        employee = EmployeeInfo(id=1, salary=Decimal("20000"))
        records = [AttendanceEntry(employee_id=1, date="2024-01-10", status="Present")]
        result = generate_payroll_record(employee, records, "2024-01", self.start, self.end, rates=rates)
        self.assertEqual(result.base_salary, Decimal("1000"))
        self.assertEqual(result.net_salary, Decimal("1000"))

    def test_missing_salary_degrades_to_zero(self):
        result = generate_payroll_record({"id": 3, "salary": None, "status": "Active"}, [], "2024-01", self.start, self.end)
        self.assertEqual(result.base_salary, Decimal("0"))
        self.assertEqual(result.net_salary, Decimal("0"))

    def test_calculations_are_repeatable(self):
        employee = EmployeeInfo(id=1, salary=Decimal("31415.92"))
        records = _january_attendance()
        first = generate_payroll_record(employee, records, "2024-01", self.start, self.end)
        second = generate_payroll_record(employee, records, "2024-01", self.start, self.end)
        self.assertEqual(first, second)

    def test_bulk_skips_inactive_employees(self):
        employees = [
            EmployeeInfo(id=1, salary=Decimal("22000"), status="Active"),
            EmployeeInfo(id=2, salary=Decimal("22000"), status="Inactive"),
        ]
        attendance = _january_attendance(employee_id=1) + _january_attendance(employee_id=2)
        results = generate_bulk_payroll(employees, attendance, "2024-01", self.start, self.end)
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].employee_id, 1)
        self.assertEqual(results[0].base_salary, Decimal("20500"))

    def test_bulk_keeps_input_order_and_splits_attendance(self):
        employees = [
            {"id": 9, "salary": 22000, "status": "On Leave"},
            {"id": 4, "salary": 11000, "status": "Active"},
        ]
        attendance = [
            {"employeeId": 4, "date": "2024-01-02", "status": "Present"},
            {"employeeId": 9, "date": "2024-01-02", "status": "Present"},
            {"employeeId": 9, "date": "2024-01-03", "status": "Half-day"},
        ]
        results = generate_bulk_payroll(employees, attendance, "2024-01", self.start, self.end)
        self.assertEqual([r.employee_id for r in results], [9, 4])
        self.assertEqual(results[0].base_salary, Decimal("1500"))
        self.assertEqual(results[1].base_salary, Decimal("500"))

    @override_settings(PAYROLL_CALCULATION={"OVERTIME_PREMIUM": "n/a", "TAX_RATE": None})
    def test_malformed_rate_settings_fall_back_to_defaults(self):
        rates = PayrollRates.from_settings()
        self.assertEqual(rates.overtime_premium, Decimal("1.25"))
        self.assertEqual(rates.tax_rate, Decimal("0.10"))

    @override_settings(PAYROLL_CALCULATION={"WORKING_DAYS_PER_MONTH": 20, "OVERTIME_PREMIUM": "1.5"})
    def test_rates_from_settings(self):
        rates = PayrollRates.from_settings()
        self.assertEqual(rates.working_days_per_month, 20)
        self.assertEqual(rates.hours_per_day, 8)
        self.assertEqual(rates.overtime_premium, Decimal("1.5"))
        self.assertEqual(rates.tax_rate, Decimal("0.10"))

    def test_pay_period_helpers(self):
        february = PayPeriod.for_month(2024, 2)
        self.assertEqual(february.start_date, date(2024, 2, 1))
        self.assertEqual(february.end_date, date(2024, 2, 29))
        self.assertEqual(february.label, "2024-02")
        self.assertTrue(february.contains("2024-02-29"))
        self.assertFalse(february.contains("2024-03-01"))

        half_month = PayPeriod.from_bounds("2024-03-16", "2024-03-31")
        self.assertEqual(half_month.label, "2024-03")
        self.assertEqual(PayPeriod.from_label("2024-12").end_date, date(2024, 12, 31))
        with self.assertRaises(ValidationError):
            PayPeriod.from_label("2024-13")


def _create_employee(**overrides):
    data = {
        "first_name": "Maria",
        "last_name": "Santos",
        "position": "Engineer",
        "salary": Decimal("22000.00"),
        "status": Employee.STATUS_ACTIVE,
    }
    data.update(overrides)
    return Employee.objects.create(**data)


def _create_january_attendance(employee, overtime_hours=Decimal("3")):
    start = date(2024, 1, 1)
    for i in range(20):
        AttendanceRecord.objects.create(employee=employee, date=start + timedelta(days=i), status="Present")
    AttendanceRecord.objects.create(employee=employee, date=date(2024, 1, 21), status="Half-day")
    AttendanceRecord.objects.create(employee=employee, date=date(2024, 1, 22), status="Absent")
    AttendanceRecord.objects.create(
        employee=employee,
        date=date(2024, 1, 23),
        status="Absent",
        overtime=overtime_hours,
    )
    AttendanceRecord.objects.create(employee=employee, date=date(2024, 2, 1), status="Present")


class PayrollServiceTests(TestCase):
    def setUp(self):
        self.employee = _create_employee()
        _create_january_attendance(self.employee)
        self.period = PayPeriod.for_month(2024, 1)

    def test_round_money(self):
        self.assertEqual(round_money(Decimal("2096.875")), Decimal("2096.88"))
        self.assertEqual(round_money(Decimal("2096.874")), Decimal("2096.87"))
        self.assertEqual(round_money(Decimal("10.5"), scale=0), Decimal("11"))
        self.assertEqual(round_money(None), Decimal("0.00"))

    def test_resolve_period(self):
        self.assertEqual(resolve_period(period="2024-01"), self.period)
        explicit = resolve_period(start_date=date(2024, 1, 1), end_date=date(2024, 1, 15))
        self.assertEqual(explicit.label, "2024-01")
        self.assertEqual(explicit.end_date, date(2024, 1, 15))
        with self.assertRaises(ValidationError):
            resolve_period()
        with self.assertRaises(ValidationError):
            resolve_period(start_date=date(2024, 1, 1))

    def test_compute_reads_stored_attendance(self):
        computed = PayrollGenerationService(period=self.period).compute(self.employee)
        self.assertEqual(computed.base_salary, Decimal("20500"))
        self.assertEqual(computed.overtime_pay, Decimal("468.75"))
        self.assertEqual(computed.net_salary, Decimal("17949.375"))
        self.assertFalse(PayrollRecord.objects.exists())

    def test_generate_rounds_and_persists(self):
        result = PayrollGenerationService(period=self.period).generate(self.employee)
        record = PayrollRecord.objects.get(id=result.record.id)

        self.assertEqual(record.period, "2024-01")
        self.assertEqual(record.base_salary, Decimal("20500.00"))
        self.assertEqual(record.overtime_pay, Decimal("468.75"))
        self.assertEqual(record.deductions, Decimal("922.50"))
        self.assertEqual(record.tax_withholding, Decimal("2096.88"))
        self.assertEqual(record.net_salary, Decimal("17949.37"))
        self.assertEqual(
            record.net_salary,
            record.base_salary + record.overtime_pay + record.bonus - record.deductions - record.tax_withholding,
        )
        self.assertEqual(record.status, PayrollRecord.STATUS_DRAFT)
        self.assertIsNone(record.payment_date)

    def test_generate_bulk_skips_inactive(self):
        inactive = _create_employee(first_name="Ben", last_name="Reyes", status=Employee.STATUS_INACTIVE)
        _create_january_attendance(inactive)

        results = PayrollGenerationService(period=self.period).generate_bulk()

        self.assertEqual(len(results), 1)
        self.assertEqual(PayrollRecord.objects.count(), 1)
        record = PayrollRecord.objects.get()
        self.assertEqual(record.employee_id, self.employee.id)
        self.assertEqual(record.net_salary, Decimal("17949.37"))

    def test_generate_bulk_can_target_employees(self):
        other = _create_employee(first_name="Carla", last_name="Diaz", salary=Decimal("11000.00"))
        results = PayrollGenerationService(period=self.period).generate_bulk(employee_ids=[other.id])
        self.assertEqual([r.record.employee_id for r in results], [other.id])
        self.assertEqual(results[0].record.base_salary, Decimal("0.00"))

    def test_model_save_recomputes_net_salary(self):
        record = PayrollRecord.objects.create(
            employee=self.employee,
            period="2024-01",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            base_salary=Decimal("1000.00"),
            bonus=Decimal("100.00"),
            deductions=Decimal("50.00"),
            tax_withholding=Decimal("110.00"),
        )
        self.assertEqual(record.net_salary, Decimal("940.00"))
        record.bonus = Decimal("0.00")
        record.save(update_fields=["bonus"])
        record.refresh_from_db()
        self.assertEqual(record.net_salary, Decimal("840.00"))

    def test_paid_status_stamps_payment_date(self):
        record = PayrollGenerationService(period=self.period).generate(self.employee).record
        record.status = PayrollRecord.STATUS_PAID
        record.save()
        self.assertEqual(record.payment_date, timezone.localdate())

        record.status = PayrollRecord.STATUS_APPROVED
        record.save()
        self.assertIsNone(record.payment_date)

    def test_summarize_by_period(self):
        service = PayrollGenerationService(period=self.period)
        paid = service.generate(self.employee).record
        paid.status = PayrollRecord.STATUS_PAID
        paid.save()
        service.generate(self.employee)
        PayrollGenerationService(period=PayPeriod.for_month(2024, 2)).generate(self.employee)

        summary = summarize_by_period(PayrollRecord.objects.all())

        self.assertEqual([row["period"] for row in summary], ["2024-02", "2024-01"])
        january = summary[1]
        self.assertEqual(january["count"], 2)
        self.assertEqual(january["total"], Decimal("35898.74"))
        self.assertEqual(january["paid"], Decimal("17949.37"))
        self.assertEqual(january["pending"], Decimal("17949.37"))


class PayrollApiTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="payroll-admin", password="pass")
        self.client.force_authenticate(self.user)
        self.employee = _create_employee()
        _create_january_attendance(self.employee)

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        resp = self.client.get(reverse("payroll-record-list"))
        self.assertIn(resp.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
        self.assertFalse(resp.data["success"])

    def test_preview_does_not_persist(self):
        resp = self.client.post(
            reverse("payroll-preview"),
            {"employee_id": self.employee.id, "period": "2024-01"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.data["data"]
        self.assertEqual(Decimal(data["net_salary"]), Decimal("17949.375"))
        self.assertEqual(data["start_date"], "2024-01-01")
        self.assertEqual(data["end_date"], "2024-01-31")
        self.assertFalse(PayrollRecord.objects.exists())

    def test_generate_persists_record(self):
        resp = self.client.post(
            reverse("payroll-generate"),
            {
                "employee_id": self.employee.id,
                "start_date": "2024-01-01",
                "end_date": "2024-01-31",
                "bonus": "500.00",
                "status": "Pending",
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        record = PayrollRecord.objects.get()
        self.assertEqual(record.period, "2024-01")
        self.assertEqual(record.bonus, Decimal("500.00"))
        self.assertEqual(record.tax_withholding, Decimal("2146.88"))
        self.assertEqual(record.status, "Pending")
        self.assertEqual(resp.data["data"]["id"], record.id)

    def test_generate_unknown_employee_returns_404(self):
        resp = self.client.post(reverse("payroll-generate"), {"employee_id": 999, "period": "2024-01"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_generate_rejects_reversed_bounds(self):
        resp = self.client.post(
            reverse("payroll-generate"),
            {"employee_id": self.employee.id, "start_date": "2024-01-31", "end_date": "2024-01-01"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data["success"])
        self.assertIn("end_date", resp.data["errors"])

    def test_generate_bulk(self):
        _create_employee(first_name="Ben", last_name="Reyes", status=Employee.STATUS_INACTIVE)
        resp = self.client.post(reverse("payroll-generate-bulk"), {"period": "2024-01"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["data"]["count"], 1)
        self.assertEqual(resp.data["data"]["period"], "2024-01")
        self.assertEqual(PayrollRecord.objects.count(), 1)

    def test_preview_bulk(self):
        resp = self.client.post(reverse("payroll-preview-bulk"), {"period": "2024-01"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["data"]["count"], 1)
        self.assertFalse(PayrollRecord.objects.exists())

    def test_list_filters(self):
        PayrollGenerationService(period=PayPeriod.for_month(2024, 1)).generate(self.employee)
        PayrollGenerationService(period=PayPeriod.for_month(2024, 2)).generate(self.employee)

        resp = self.client.get(reverse("payroll-record-list"))
        self.assertEqual([row["period"] for row in resp.data], ["2024-02", "2024-01"])

        resp = self.client.get(reverse("payroll-record-list"), {"period": "2024-01"})
        self.assertEqual(len(resp.data), 1)

        resp = self.client.get(reverse("payroll-record-list"), {"start_date": "2024-02-01"})
        self.assertEqual([row["period"] for row in resp.data], ["2024-02"])

        resp = self.client.get(reverse("payroll-record-list"), {"end_date": "2024-01-31", "status": "Draft"})
        self.assertEqual([row["period"] for row in resp.data], ["2024-01"])

        resp = self.client.get(reverse("payroll-record-list"), {"start_date": "bad"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_rejects_non_numeric_employee_id(self):
        PayrollGenerationService(period=PayPeriod.for_month(2024, 1)).generate(self.employee)

        resp = self.client.get(reverse("payroll-record-list"), {"employee_id": self.employee.id})
        self.assertEqual(len(resp.data), 1)

        resp = self.client.get(reverse("payroll-record-list"), {"employee_id": "abc"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.data["success"])
        self.assertIn("employee_id", resp.data["errors"])

        resp = self.client.get(reverse("payroll-summary"), {"employee_id": "abc"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_recomputes_net_salary(self):
        record = PayrollGenerationService(period=PayPeriod.for_month(2024, 1)).generate(self.employee).record
        resp = self.client.patch(
            reverse("payroll-record-detail", args=[record.id]),
            {"bonus": "100.00", "net_salary": "1.00"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        record.refresh_from_db()
        self.assertEqual(record.net_salary, Decimal("18049.37"))

    def test_status_change_to_paid_stamps_payment_date(self):
        record = PayrollGenerationService(period=PayPeriod.for_month(2024, 1)).generate(self.employee).record
        url = reverse("payroll-record-update-status", args=[record.id])

        resp = self.client.post(url, {"status": "Paid"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        record.refresh_from_db()
        self.assertEqual(record.payment_date, timezone.localdate())

        resp = self.client.post(url, {"status": "Paid", "payment_date": "2024-02-05"}, format="json")
        record.refresh_from_db()
        self.assertEqual(record.payment_date, date(2024, 2, 5))

        resp = self.client.post(url, {"status": "Approved"}, format="json")
        record.refresh_from_db()
        self.assertIsNone(record.payment_date)

        resp = self.client.post(url, {"status": "Cancelled"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        service = PayrollGenerationService(period=PayPeriod.for_month(2024, 1))
        service.generate(self.employee)
        resp = self.client.get(reverse("payroll-summary"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        rows = resp.data["data"]["results"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["period"], "2024-01")
        self.assertEqual(rows[0]["pending"], Decimal("17949.37"))
