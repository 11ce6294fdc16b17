from django.contrib import admin
from .models import IAMAccount


@admin.register(IAMAccount)
class IAMAccountAdmin(admin.ModelAdmin):
    list_display = ['requestor', 'knox_id', 'permission', 'cloud_platform', 'project_accounts', 'status',
                    'duration_start_date', 'duration_end_date']
    list_filter = ['status', 'cloud_platform']
    search_fields = ['requestor', 'knox_id', 'approval_id', 'project_accounts']
    ordering = ['-updated_at']
    readonly_fields = ['created_at', 'updated_at']
