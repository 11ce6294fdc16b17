from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from backend.core.crud import list_create, detail, filter_queryset
from backend.core.importing import handle_import, handle_export
from .models import VirtualMachine
from .serializers import VirtualMachineSerializer
from .filters import VirtualMachineFilter
from .importers import vm_records_from_csv, VM_EXPORT_COLUMNS


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def vm_list_create(request):
    """List virtual machines (filtered, paginated) or register a new one"""
    return list_create(request, VirtualMachine.objects.all(), VirtualMachineSerializer, VirtualMachineFilter)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def vm_detail(request, pk):
    """Retrieve, update or delete a virtual machine"""
    return detail(request, pk, VirtualMachine.objects.all(), VirtualMachineSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def vm_import(request):
    """Bulk-create virtual machines from a CSV upload or a JSON {"vms": [...]} body"""
    return handle_import(request, 'vms', vm_records_from_csv, VirtualMachineSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def vm_export(request):
    queryset = filter_queryset(request, VirtualMachine.objects.all(), VirtualMachineFilter)
    filename = f"vms-{timezone.localdate().isoformat()}.csv"
    return handle_export(request, queryset, VirtualMachineSerializer, VM_EXPORT_COLUMNS, filename)
