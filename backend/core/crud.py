"""
Shared bodies for the list/create and detail endpoints of every inventory entity.

Entity views stay thin ``@api_view`` functions that pass their queryset,
serializer and filterset in here.
"""
import logging

from django.db import IntegrityError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .cache_utils import cached_list
from .pagination import paginate
from .utils import create_audit_log

logger = logging.getLogger('backend.core.crud')


def filter_queryset(request, queryset, filterset_class):
    """Apply the FilterSet to the query string; bad filter values become a 400"""
    filterset = filterset_class(request.query_params, queryset=queryset, request=request)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


def list_create(request, queryset, serializer_class, filterset_class):
    model = serializer_class.Meta.model
    model_name = model.__name__

    if request.method == 'GET':
        data = cached_list(
            request,
            model,
            lambda: paginate(request, filter_queryset(request, queryset, filterset_class), serializer_class),
        )
        return Response(data)

    try:
        logger.info(f"User {request.user.username} creating {model_name}")
        serializer = serializer_class(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"{model_name} creation validation failed: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            instance = serializer.save()
        except IntegrityError as e:
            logger.error(f"IntegrityError creating {model_name}: {str(e)}", exc_info=True)
            return Response({'error': f'Database error occurred while creating {model_name}'}, status=status.HTTP_400_BAD_REQUEST)

        create_audit_log(
            request=request,
            action='create',
            model_name=model_name,
            object_id=instance.pk,
            object_name=str(instance),
            changes=serializer.data,
        )
        logger.info(f"{model_name} {instance.pk} created by {request.user.username}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    except Exception as e:
        logger.error(f"Unexpected error creating {model_name}: {str(e)}", exc_info=True)
        return Response({'error': 'An unexpected error occurred'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def detail(request, pk, queryset, serializer_class):
    model_name = serializer_class.Meta.model.__name__
    instance = get_object_or_404(queryset, pk=pk)

    if request.method == 'GET':
        return Response(serializer_class(instance).data)

    try:
        if request.method in ('PUT', 'PATCH'):
            partial = request.method == 'PATCH'
            logger.info(f"User {request.user.username} {'patching' if partial else 'updating'} {model_name} {pk}")
            serializer = serializer_class(instance, data=request.data, partial=partial)
            if not serializer.is_valid():
                logger.warning(f"{model_name} {pk} update validation failed: {serializer.errors}")
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            try:
                serializer.save()
            except IntegrityError as e:
                logger.error(f"IntegrityError updating {model_name} {pk}: {str(e)}", exc_info=True)
                return Response({'error': f'Database error occurred while updating {model_name}'}, status=status.HTTP_400_BAD_REQUEST)

            create_audit_log(
                request=request,
                action='update',
                model_name=model_name,
                object_id=pk,
                object_name=str(instance),
                changes={'fields': sorted(serializer.validated_data.keys())},
            )
            logger.info(f"{model_name} {pk} updated by {request.user.username}")
            return Response(serializer.data)

        # DELETE
        object_name = str(instance)
        instance.delete()
        create_audit_log(request=request, action='delete', model_name=model_name, object_id=pk, object_name=object_name)
        logger.info(f"{model_name} {pk} ({object_name}) deleted by {request.user.username}")
        return Response(status=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        logger.error(f"Unexpected error in {model_name} detail for pk {pk}: {str(e)}", exc_info=True)
        return Response({'error': 'An unexpected error occurred'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
