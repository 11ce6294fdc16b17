import django_filters
from backend.core.filters import AllAwareCharFilter, SearchFilterSet
from .models import VirtualMachine


class VirtualMachineFilter(SearchFilterSet):
    search_fields = ('vm_id', 'vm_name', 'vm_ip', 'hostname', 'host_ip', 'user', 'jira_ticket')

    vm_status = AllAwareCharFilter(field_name='vm_status', lookup_expr='iexact')
    hypervisor = AllAwareCharFilter(field_name='hypervisor', lookup_expr='iexact')
    department = AllAwareCharFilter(field_name='department', lookup_expr='iexact')
    internet_access = django_filters.BooleanFilter(field_name='internet_access')

    class Meta:
        model = VirtualMachine
        fields = ['search', 'vm_status', 'hypervisor', 'department', 'internet_access']
