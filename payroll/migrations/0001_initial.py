import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("employees", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PayrollRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("period", models.CharField(db_index=True, help_text="YYYY-MM", max_length=7)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("base_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("overtime_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("bonus", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("deductions", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("tax_withholding", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "net_salary",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=14),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("Draft", "Draft"), ("Pending", "Pending"), ("Approved", "Approved"), ("Paid", "Paid")],
                        db_index=True,
                        default="Draft",
                        max_length=10,
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("bank_transfer_ref", models.CharField(blank=True, max_length=100, null=True)),
                ("payment_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payroll_records",
                        to="employees.employee",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payroll Record",
                "verbose_name_plural": "Payroll Records",
                "db_table": "payroll_records",
                "ordering": ["-start_date", "employee_id"],
                "indexes": [
                    models.Index(fields=["employee", "period"], name="payroll_employee_period_idx"),
                ],
            },
        ),
    ]
