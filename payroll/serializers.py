from rest_framework import serializers

from .calculations import PAYROLL_STATUSES
from .models import PayrollRecord


class PayrollRecordSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)

    class Meta:
        model = PayrollRecord
        fields = [
            "id",
            "employee",
            "employee_name",
            "period",
            "start_date",
            "end_date",
            "base_salary",
            "overtime_pay",
            "bonus",
            "deductions",
            "tax_withholding",
            "net_salary",
            "status",
            "notes",
            "bank_transfer_ref",
            "payment_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "employee_name", "net_salary", "created_at", "updated_at"]

    def validate_period(self, value):
        parts = value.split("-")
        if len(parts) != 2 or not all(part.isdigit() for part in parts) or not 1 <= int(parts[1]) <= 12:
            raise serializers.ValidationError("Period must use the YYYY-MM format.")
        return value

    def validate(self, attrs):
        start_date = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end_date = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date."})
        return attrs


class ComputedPayrollSerializer(serializers.Serializer):
    employee = serializers.IntegerField(source="employee_id")
    period = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    base_salary = serializers.DecimalField(max_digits=20, decimal_places=6)
    overtime_pay = serializers.DecimalField(max_digits=20, decimal_places=6)
    bonus = serializers.DecimalField(max_digits=20, decimal_places=6)
    deductions = serializers.DecimalField(max_digits=20, decimal_places=6)
    tax_withholding = serializers.DecimalField(max_digits=20, decimal_places=6)
    net_salary = serializers.DecimalField(max_digits=20, decimal_places=6)
    status = serializers.CharField()
    notes = serializers.CharField()


class PayrollPeriodSerializer(serializers.Serializer):
    period = serializers.RegexField(r"^\d{4}-(0[1-9]|1[0-2])$", required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start_date = attrs.get("start_date")
        end_date = attrs.get("end_date")
        if bool(start_date) != bool(end_date):
            raise serializers.ValidationError("Provide both start_date and end_date, or only a period.")
        if not attrs.get("period") and not start_date:
            raise serializers.ValidationError("A period or a start_date/end_date pair is required.")
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date."})
        return attrs


class PayrollGenerateSerializer(PayrollPeriodSerializer):
    employee_id = serializers.IntegerField()
    bonus = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    extra_deductions = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    status = serializers.ChoiceField(choices=PAYROLL_STATUSES, required=False, default=PayrollRecord.STATUS_DRAFT)


class PayrollBulkGenerateSerializer(PayrollPeriodSerializer):
    employee_ids = serializers.ListField(child=serializers.IntegerField(), required=False)


class PayrollStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PAYROLL_STATUSES)
    payment_date = serializers.DateField(required=False, allow_null=True)
