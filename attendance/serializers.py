from rest_framework import serializers

from .models import AttendanceRecord


class AttendanceRecordSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    worked_minutes = serializers.SerializerMethodField()

    class Meta:
        model = AttendanceRecord
        fields = [
            "id",
            "employee",
            "employee_name",
            "date",
            "time_in",
            "time_out",
            "morning_in",
            "morning_out",
            "afternoon_in",
            "afternoon_out",
            "worked_minutes",
            "status",
            "overtime",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "employee_name", "worked_minutes", "created_at", "updated_at"]

    def get_worked_minutes(self, obj):
        return obj.compute_worked_minutes()

    def validate(self, attrs):
        windows = [
            ("time_in", "time_out"),
            ("morning_in", "morning_out"),
            ("afternoon_in", "afternoon_out"),
        ]
        errors = {}
        for start_field, end_field in windows:
            start = attrs.get(start_field, getattr(self.instance, start_field, None))
            end = attrs.get(end_field, getattr(self.instance, end_field, None))
            if start and end and end <= start:
                errors[end_field] = f"Must be later than {start_field}."
        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class AttendanceBulkCreateSerializer(serializers.Serializer):
    records = AttendanceRecordSerializer(many=True, allow_empty=False)


class AttendanceSummarySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    employee_id = serializers.IntegerField(required=False)

    def validate(self, attrs):
        start_date = attrs.get("start_date")
        end_date = attrs.get("end_date")
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date."})
        return attrs
