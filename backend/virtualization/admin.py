from django.contrib import admin
from .models import VirtualMachine


@admin.register(VirtualMachine)
class VirtualMachineAdmin(admin.ModelAdmin):
    list_display = ['vm_id', 'vm_name', 'vm_status', 'vm_ip', 'hypervisor', 'hostname', 'department', 'updated_at']
    list_filter = ['vm_status', 'hypervisor', 'internet_access', 'department']
    search_fields = ['vm_id', 'vm_name', 'vm_ip', 'hostname', 'jira_ticket']
    ordering = ['-updated_at']
    readonly_fields = ['created_at', 'updated_at']
