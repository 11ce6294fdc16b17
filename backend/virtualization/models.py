from django.db import models
from backend.core.csv_import import NOT_AVAILABLE


class VirtualMachine(models.Model):
    """Virtual machine and the physical host it runs on"""
    # VM identification
    vm_id = models.CharField(max_length=100, db_index=True)
    vm_name = models.CharField(max_length=200)
    vm_status = models.CharField(max_length=50, default='Provisioning', db_index=True)
    vm_ip = models.CharField(max_length=64, default=NOT_AVAILABLE)
    internet_access = models.BooleanField(default=False)
    vm_os = models.CharField(max_length=100, default=NOT_AVAILABLE)
    vm_os_version = models.CharField(max_length=100, default=NOT_AVAILABLE)

    # Host details
    hypervisor = models.CharField(max_length=100)
    hostname = models.CharField(max_length=200, default=NOT_AVAILABLE)
    host_model = models.CharField(max_length=200, default=NOT_AVAILABLE)
    host_ip = models.CharField(max_length=64, default=NOT_AVAILABLE)
    host_os = models.CharField(max_length=100, default=NOT_AVAILABLE)
    rack = models.CharField(max_length=100, default=NOT_AVAILABLE)

    # Usage and tracking
    deployed_by = models.CharField(max_length=200, default=NOT_AVAILABLE)
    user = models.CharField(max_length=200, default=NOT_AVAILABLE)
    department = models.CharField(max_length=100, default=NOT_AVAILABLE)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    jira_ticket = models.CharField(max_length=100, default=NOT_AVAILABLE)
    remarks = models.TextField(default=NOT_AVAILABLE)
    date_deleted = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.vm_name} ({self.vm_id})"

    class Meta:
        db_table = 'virtual_machines'
        ordering = ['-updated_at', '-id']
