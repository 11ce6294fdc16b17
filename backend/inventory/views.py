from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from backend.core.crud import list_create, detail, filter_queryset
from backend.core.importing import handle_import, handle_export
from .models import Asset, Component, Accessory
from .serializers import AssetSerializer, ComponentSerializer, AccessorySerializer
from .filters import AssetFilter, ComponentFilter, AccessoryFilter
from .importers import (
    asset_records_from_csv, component_records_from_csv, accessory_records_from_csv,
    ASSET_EXPORT_COLUMNS, COMPONENT_EXPORT_COLUMNS, ACCESSORY_EXPORT_COLUMNS,
)


def _export_filename(prefix):
    return f"{prefix}-{timezone.localdate().isoformat()}.csv"


# Asset views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def asset_list_create(request):
    """List assets (filtered, paginated) or create a new asset"""
    return list_create(request, Asset.objects.all(), AssetSerializer, AssetFilter)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def asset_detail(request, pk):
    """Retrieve, update or delete an asset"""
    return detail(request, pk, Asset.objects.all(), AssetSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def asset_import(request):
    """Bulk-create assets from a CSV upload or a JSON {"assets": [...]} body"""
    return handle_import(request, 'assets', asset_records_from_csv, AssetSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def asset_export(request):
    """Download the filtered asset list as CSV"""
    queryset = filter_queryset(request, Asset.objects.all(), AssetFilter)
    return handle_export(request, queryset, AssetSerializer, ASSET_EXPORT_COLUMNS, _export_filename('assets'))


# Component views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def component_list_create(request):
    """List components or create a new component"""
    return list_create(request, Component.objects.all(), ComponentSerializer, ComponentFilter)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def component_detail(request, pk):
    """Retrieve, update or delete a component"""
    return detail(request, pk, Component.objects.all(), ComponentSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def component_import(request):
    return handle_import(request, 'components', component_records_from_csv, ComponentSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def component_export(request):
    queryset = filter_queryset(request, Component.objects.all(), ComponentFilter)
    return handle_export(request, queryset, ComponentSerializer, COMPONENT_EXPORT_COLUMNS, _export_filename('components'))


# Accessory views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def accessory_list_create(request):
    """List accessories or create a new accessory"""
    return list_create(request, Accessory.objects.select_related('assigned_to'), AccessorySerializer, AccessoryFilter)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def accessory_detail(request, pk):
    """Retrieve, update or delete an accessory"""
    return detail(request, pk, Accessory.objects.select_related('assigned_to'), AccessorySerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accessory_import(request):
    return handle_import(request, 'accessories', accessory_records_from_csv, AccessorySerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def accessory_export(request):
    queryset = filter_queryset(request, Accessory.objects.select_related('assigned_to'), AccessoryFilter)
    return handle_export(request, queryset, AccessorySerializer, ACCESSORY_EXPORT_COLUMNS, _export_filename('accessories'))
