import logging

from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from backend.core.crud import list_create, detail, filter_queryset
from backend.core.csv_import import csv_response
from backend.core.importing import handle_import, handle_export
from .models import IAMAccount
from .serializers import IAMAccountSerializer
from .filters import IAMAccountFilter
from .importers import iam_records_from_csv, IAM_EXPORT_COLUMNS, TEMPLATE_COLUMNS, TEMPLATE_ROWS

logger = logging.getLogger('backend.iam')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def iam_account_list_create(request):
    """List IAM accounts (filtered, paginated) or create a new one"""
    return list_create(request, IAMAccount.objects.all(), IAMAccountSerializer, IAMAccountFilter)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def iam_account_detail(request, pk):
    return detail(request, pk, IAMAccount.objects.all(), IAMAccountSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def iam_account_filter_options(request):
    """Distinct values for the list page's filter dropdowns"""
    def distinct(field):
        values = IAMAccount.objects.exclude(**{f'{field}__isnull': True}).exclude(**{field: ''})
        return sorted(set(values.values_list(field, flat=True)))

    return Response({
        'cloud_platforms': distinct('cloud_platform'),
        'statuses': distinct('status'),
        'project_accounts': distinct('project_accounts'),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def iam_account_import(request):
    """Bulk-create IAM accounts from a CSV upload or a JSON {"accounts": [...]} body"""
    return handle_import(request, 'accounts', iam_records_from_csv, IAMAccountSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def iam_account_export(request):
    queryset = filter_queryset(request, IAMAccount.objects.all(), IAMAccountFilter)
    filename = f"iam-accounts-{timezone.localdate().isoformat()}.csv"
    return handle_export(request, queryset, IAMAccountSerializer, IAM_EXPORT_COLUMNS, filename)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def iam_account_template(request):
    """Sample import file with two example grants"""
    logger.debug(f"User {request.user.username} downloaded the IAM import template")
    return csv_response(TEMPLATE_ROWS, TEMPLATE_COLUMNS, 'iam-accounts-template.csv')
