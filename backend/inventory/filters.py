import django_filters
from backend.core.filters import AllAwareCharFilter, SearchFilterSet
from .models import Asset, Component, Accessory


class AssetFilter(SearchFilterSet):
    search_fields = ('asset_tag', 'name', 'serial_number', 'knox_id', 'model',
                     'manufacturer', 'ip_address', 'mac_address', 'department', 'location')

    status = AllAwareCharFilter(field_name='status')
    category = AllAwareCharFilter(field_name='category', lookup_expr='iexact')
    condition = AllAwareCharFilter(field_name='condition', lookup_expr='iexact')
    department = AllAwareCharFilter(field_name='department', lookup_expr='iexact')
    location = AllAwareCharFilter(field_name='location', lookup_expr='iexact')

    class Meta:
        model = Asset
        fields = ['search', 'status', 'category', 'condition', 'department', 'location']


class ComponentFilter(SearchFilterSet):
    search_fields = ('name', 'category', 'serial_number', 'manufacturer', 'model')

    category = AllAwareCharFilter(field_name='category', lookup_expr='iexact')
    manufacturer = AllAwareCharFilter(field_name='manufacturer', lookup_expr='iexact')

    class Meta:
        model = Component
        fields = ['search', 'category', 'manufacturer']


class AccessoryFilter(SearchFilterSet):
    search_fields = ('name', 'category', 'serial_number', 'manufacturer', 'model',
                     'assigned_to__username')

    status = AllAwareCharFilter(field_name='status')
    category = AllAwareCharFilter(field_name='category', lookup_expr='iexact')
    assigned_to = django_filters.NumberFilter(field_name='assigned_to_id', lookup_expr='exact')

    class Meta:
        model = Accessory
        fields = ['search', 'status', 'category', 'assigned_to']
