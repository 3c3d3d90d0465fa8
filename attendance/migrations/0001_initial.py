import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("employees", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AttendanceRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(db_index=True)),
                ("time_in", models.TimeField(blank=True, null=True)),
                ("time_out", models.TimeField(blank=True, null=True)),
                ("morning_in", models.TimeField(blank=True, null=True)),
                ("morning_out", models.TimeField(blank=True, null=True)),
                ("afternoon_in", models.TimeField(blank=True, null=True)),
                ("afternoon_out", models.TimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Present", "Present"),
                            ("Absent", "Absent"),
                            ("Late", "Late"),
                            ("Half-day", "Half-day"),
                            ("On Leave", "On Leave"),
                        ],
                        db_index=True,
                        default="Present",
                        max_length=20,
                    ),
                ),
                (
                    "overtime",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Overtime hours worked on this date.",
                        max_digits=6,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendance_records",
                        to="employees.employee",
                    ),
                ),
            ],
            options={
                "verbose_name": "Attendance Record",
                "verbose_name_plural": "Attendance Records",
                "db_table": "attendance_records",
                "ordering": ["-date", "employee_id"],
                "indexes": [
                    models.Index(fields=["employee", "date"], name="attendance_employee_date_idx"),
                ],
            },
        ),
    ]
