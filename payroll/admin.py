from django.contrib import admin

from .models import PayrollRecord


@admin.register(PayrollRecord)
class PayrollRecordAdmin(admin.ModelAdmin):
    list_display = ("employee", "period", "start_date", "end_date", "net_salary", "status", "payment_date")
    list_filter = ("status", "period")
    search_fields = ("employee__first_name", "employee__last_name", "period")
    readonly_fields = ("net_salary", "created_at", "updated_at")
