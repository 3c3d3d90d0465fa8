from django.contrib import admin
from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_code', 'first_name', 'last_name', 'position', 'department', 'status', 'salary']
    list_filter = ['status', 'department']
    search_fields = ['first_name', 'last_name', 'email', 'employee_code']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'employee_code', 'first_name', 'last_name', 'birth_date')
        }),
        ('Contact Information', {
            'fields': ('email', 'phone', 'address', 'emergency_contact', 'emergency_phone')
        }),
        ('Employment Details', {
            'fields': ('position', 'department', 'status', 'hire_date')
        }),
        ('Payroll Information', {
            'fields': ('salary', 'bank_details', 'tax_id')
        }),
        ('Other', {
            'fields': ('notes', 'created_at', 'updated_at')
        }),
    )
