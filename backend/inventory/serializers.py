from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from backend.core.serializers import BlankAsNullDateField
from .models import Asset, Component, Accessory

User = get_user_model()


class AssetSerializer(serializers.ModelSerializer):
    # Optional on input: Asset.save() generates one when blank
    asset_tag = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        validators=[UniqueValidator(queryset=Asset.objects.all(), message='An asset with this tag already exists')],
    )
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    purchase_date = BlankAsNullDateField(required=False, allow_null=True)

    class Meta:
        model = Asset
        fields = ['id', 'asset_tag', 'name', 'serial_number', 'category', 'status', 'status_display', 'condition',
                  'model', 'manufacturer', 'purchase_date', 'purchase_cost', 'location', 'knox_id',
                  'ip_address', 'mac_address', 'os_type', 'department', 'description', 'warranty',
                  'supplier', 'notes', 'custom_fields', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ComponentSerializer(serializers.ModelSerializer):
    purchase_date = BlankAsNullDateField(required=False, allow_null=True)

    class Meta:
        model = Component
        fields = ['id', 'name', 'category', 'quantity', 'serial_number', 'manufacturer', 'model',
                  'description', 'purchase_date', 'purchase_cost', 'location', 'notes',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class AccessorySerializer(serializers.ModelSerializer):
    purchase_date = BlankAsNullDateField(required=False, allow_null=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    assigned_to_username = serializers.CharField(source='assigned_to.username', read_only=True, default=None)
    assigned_to = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)

    class Meta:
        model = Accessory
        fields = ['id', 'name', 'category', 'status', 'status_display', 'quantity', 'serial_number',
                  'manufacturer', 'model', 'description', 'purchase_date', 'purchase_cost', 'location',
                  'notes', 'assigned_to', 'assigned_to_username', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
