"""
Bulk CSV import/export pipeline shared by the entity endpoints and the
``import_csv`` management command.

Import flow: uploaded file -> ``read_csv_upload`` -> entity ``records_from_csv``
(alias mapping + defaults/coercion) -> serializer validation per row -> save.
"""
import logging

from django.db import transaction
from rest_framework import status
from rest_framework.response import Response

from .cache_signals import suspend_cache_signals
from .cache_utils import invalidate_list_cache
from .csv_import import CSVImportError, read_csv_upload, csv_response, default_columns
from .utils import create_audit_log

logger = logging.getLogger('backend.core.importing')


def save_records(records, serializer_class, dry_run=False):
    """
    Validate and save ``[(line, data)]`` with ``serializer_class``.

    Invalid rows are collected, not raised; valid rows are saved. With
    ``dry_run`` the rows are saved inside a transaction that is rolled back,
    so uniqueness checks between rows of the same file still apply.

    Returns {'successful': int, 'failed': int, 'errors': [{'line', 'errors'}]}
    """
    successful = 0
    errors = []

    with suspend_cache_signals():
        with transaction.atomic():
            for line, data in records:
                serializer = serializer_class(data=data)
                if serializer.is_valid():
                    serializer.save()
                    successful += 1
                else:
                    errors.append({'line': line, 'errors': serializer.errors})
            if dry_run:
                transaction.set_rollback(True)

    if successful and not dry_run:
        invalidate_list_cache(serializer_class.Meta.model)

    return {'successful': successful, 'failed': len(errors), 'errors': errors}


def handle_import(request, payload_key, records_from_csv, serializer_class):
    """
    Import endpoint body. Accepts a multipart ``file`` (CSV) or a JSON body
    ``{payload_key: [records]}`` of already-mapped records.
    """
    model_name = serializer_class.Meta.model.__name__
    try:
        upload = request.FILES.get('file')
        if upload is not None:
            source = upload.name
            records = records_from_csv(read_csv_upload(upload))
        else:
            payload = request.data.get(payload_key) if hasattr(request.data, 'get') else None
            if not isinstance(payload, list):
                raise CSVImportError(f'Upload a CSV file as "file" or send a JSON list under "{payload_key}"')
            source = 'json'
            records = [(index + 1, item) for index, item in enumerate(payload)]

        if not records:
            raise CSVImportError('No valid data to import')

        logger.info(f"User {request.user.username} importing {len(records)} {model_name} records from {source}")
        result = save_records(records, serializer_class)
    except CSVImportError as e:
        logger.warning(f"{model_name} import rejected: {e.message}")
        body = {'error': e.message}
        if e.line is not None:
            body['line'] = e.line
        return Response(body, status=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(f"Unexpected error importing {model_name}: {str(e)}", exc_info=True)
        return Response({'error': 'An unexpected error occurred'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    create_audit_log(
        request=request,
        action='import',
        model_name=model_name,
        object_id='bulk',
        object_name=source,
        changes={'successful': result['successful'], 'failed': result['failed']},
    )

    if result['successful'] == 0:
        logger.warning(f"{model_name} import from {source} saved nothing ({result['failed']} rows failed)")
        return Response({'error': 'No valid data to import', **result}, status=status.HTTP_400_BAD_REQUEST)

    logger.info(f"{model_name} import from {source}: {result['successful']} saved, {result['failed']} failed")
    return Response(result, status=status.HTTP_201_CREATED)


def handle_export(request, queryset, serializer_class, columns, filename):
    """
    Export endpoint body: serialize the (already filtered) queryset as a CSV attachment.
    With no explicit columns every serializer field is exported under a title-cased label.
    """
    if columns is None:
        columns = default_columns(serializer_class.Meta.fields)
    model_name = serializer_class.Meta.model.__name__
    rows = serializer_class(queryset, many=True).data

    create_audit_log(
        request=request,
        action='export',
        model_name=model_name,
        object_id='bulk',
        object_name=filename,
        changes={'rows': len(rows)},
    )
    logger.info(f"User {request.user.username} exported {len(rows)} {model_name} rows to {filename}")
    return csv_response(rows, columns, filename)
