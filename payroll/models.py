from decimal import Decimal

from django.db import models

from employees.models import Employee

from .calculations import net_salary


class PayrollRecord(models.Model):
    STATUS_DRAFT = "Draft"
    STATUS_PENDING = "Pending"
    STATUS_APPROVED = "Approved"
    STATUS_PAID = "Paid"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_PAID, "Paid"),
    ]

    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name="payroll_records")
    period = models.CharField(max_length=7, db_index=True, help_text="YYYY-MM")
    start_date = models.DateField()
    end_date = models.DateField()

    base_salary = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    overtime_pay = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    bonus = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    deductions = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax_withholding = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    net_salary = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"), editable=False)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_index=True)
    notes = models.TextField(blank=True, null=True)
    bank_transfer_ref = models.CharField(max_length=100, blank=True, null=True)
    payment_date = models.DateField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "payroll_records"
        verbose_name = "Payroll Record"
        verbose_name_plural = "Payroll Records"
        ordering = ["-start_date", "employee_id"]
        indexes = [
            models.Index(fields=["employee", "period"], name="payroll_employee_period_idx"),
        ]

    def compute_net_salary(self) -> Decimal:
        return net_salary(
            self.base_salary,
            self.overtime_pay,
            self.bonus,
            self.deductions,
            self.tax_withholding,
        )

    def save(self, *args, **kwargs):
        self.net_salary = self.compute_net_salary()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "net_salary" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["net_salary"]
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Payroll {self.period} - {self.employee_id} ({self.status})"
