from rest_framework import serializers
from backend.core.csv_import import NOT_AVAILABLE
from backend.core.serializers import BlankAsNullDateField
from .models import IAMAccount


class IAMAccountSerializer(serializers.ModelSerializer):
    duration_start_date = BlankAsNullDateField(required=False, allow_null=True)
    duration_end_date = BlankAsNullDateField(required=False, allow_null=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    duration_display = serializers.SerializerMethodField()
    approval_expired = serializers.SerializerMethodField()

    class Meta:
        model = IAMAccount
        fields = ['id', 'requestor', 'knox_id', 'permission', 'duration_start_date', 'duration_end_date',
                  'duration_display', 'cloud_platform', 'project_accounts', 'approval_id', 'approval_expired',
                  'remarks', 'status', 'status_display', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {
            'requestor': {'error_messages': {'blank': 'Requestor is required', 'required': 'Requestor is required'}},
            'knox_id': {'error_messages': {'blank': 'Knox ID is required', 'required': 'Knox ID is required'}},
            'permission': {'error_messages': {'blank': 'Permission is required', 'required': 'Permission is required'}},
            'cloud_platform': {'error_messages': {'blank': 'Cloud Platform is required', 'required': 'Cloud Platform is required'}},
        }

    def get_duration_display(self, obj):
        """
        Extended grants drop their dates; others show start/end or N/A.
        Removed access keeps its end date but flags the start as struck out.
        """
        if obj.status == 'extended':
            return 'Extended (dates removed)'
        display = {
            'start': obj.duration_start_date.isoformat() if obj.duration_start_date else NOT_AVAILABLE,
            'end': obj.duration_end_date.isoformat() if obj.duration_end_date else NOT_AVAILABLE,
        }
        if obj.status == 'access_removed':
            display['start_removed'] = True
        return display

    def get_approval_expired(self, obj):
        return obj.status == 'expired'

    def validate(self, attrs):
        start = attrs.get('duration_start_date', getattr(self.instance, 'duration_start_date', None))
        end = attrs.get('duration_end_date', getattr(self.instance, 'duration_end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'duration_end_date': 'Duration end date cannot be before the start date'})
        return attrs
