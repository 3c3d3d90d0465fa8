from django.contrib import admin

from .models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ("employee", "date", "status", "time_in", "time_out", "overtime")
    list_filter = ("status", "date")
    search_fields = ("employee__first_name", "employee__last_name")
