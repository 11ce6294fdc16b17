from django.contrib import admin
from .models import Asset, Component, Accessory


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['asset_tag', 'name', 'serial_number', 'category', 'status', 'condition', 'department', 'updated_at']
    list_filter = ['status', 'category', 'condition', 'department']
    search_fields = ['asset_tag', 'name', 'serial_number', 'knox_id']
    ordering = ['-updated_at']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Component)
class ComponentAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'quantity', 'manufacturer', 'model', 'updated_at']
    list_filter = ['category', 'manufacturer']
    search_fields = ['name', 'serial_number', 'model']
    ordering = ['name']


@admin.register(Accessory)
class AccessoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'status', 'quantity', 'assigned_to', 'updated_at']
    list_filter = ['status', 'category']
    search_fields = ['name', 'serial_number', 'assigned_to__username']
    ordering = ['name']
