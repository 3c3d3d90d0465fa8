from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from payroll.calculations import EmployeeInfo


class Employee(models.Model):
    """Employee master record"""

    STATUS_ACTIVE = 'Active'
    STATUS_INACTIVE = 'Inactive'
    STATUS_ON_LEAVE = 'On Leave'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
        (STATUS_ON_LEAVE, 'On Leave'),
    ]

    # Basic Information
    employee_code = models.CharField(max_length=50, blank=True, null=True, db_index=True, help_text='Company-assigned employee ID')
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    birth_date = models.DateField(blank=True, null=True)

    # Contact Information
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    emergency_contact = models.CharField(max_length=200, blank=True, null=True)
    emergency_phone = models.CharField(max_length=20, blank=True, null=True)

    # Employment Details
    position = models.CharField(max_length=255)
    department = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    hire_date = models.DateField(blank=True, null=True)

    # Payroll Information
    salary = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
        validators=[MinValueValidator(0)],
        help_text='Monthly salary',
    )
    bank_details = models.CharField(max_length=255, blank=True, null=True)
    tax_id = models.CharField(max_length=50, blank=True, null=True)

    notes = models.TextField(blank=True, null=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'employees'
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='employees_last_na_6f1c2e_idx'),
            models.Index(fields=['email'], name='employees_email_8a9d41_idx'),
        ]
        ordering = ['last_name', 'first_name']

    def __str__(self):
        if self.employee_code:
            return f"{self.first_name} {self.last_name} ({self.employee_code})"
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self):
        return self.status != self.STATUS_INACTIVE

    def to_payroll_input(self):
        """Snapshot of the fields the payroll engine reads"""
        return EmployeeInfo(
            id=self.id,
            salary=self.salary or Decimal("0.00"),
            status=self.status,
            first_name=self.first_name,
            last_name=self.last_name,
        )
