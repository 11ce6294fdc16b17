from rest_framework import serializers
from backend.core.serializers import BlankAsNullDateField
from .models import VirtualMachine


class VirtualMachineSerializer(serializers.ModelSerializer):
    start_date = BlankAsNullDateField(required=False, allow_null=True)
    end_date = BlankAsNullDateField(required=False, allow_null=True)

    class Meta:
        model = VirtualMachine
        fields = ['id', 'vm_id', 'vm_name', 'vm_status', 'vm_ip', 'internet_access', 'vm_os', 'vm_os_version',
                  'hypervisor', 'hostname', 'host_model', 'host_ip', 'host_os', 'rack',
                  'deployed_by', 'user', 'department', 'start_date', 'end_date', 'jira_ticket', 'remarks',
                  'date_deleted', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({'end_date': 'End date cannot be before start date'})
        return attrs
