from django.urls import path
from .views import (
    asset_list_create, asset_detail, asset_import, asset_export,
    component_list_create, component_detail, component_import, component_export,
    accessory_list_create, accessory_detail, accessory_import, accessory_export,
)

urlpatterns = [
    # Asset endpoints
    path('assets/', asset_list_create, name='asset-list-create'),
    path('assets/import/', asset_import, name='asset-import'),
    path('assets/export/', asset_export, name='asset-export'),
    path('assets/<int:pk>/', asset_detail, name='asset-detail'),

    # Component endpoints
    path('components/', component_list_create, name='component-list-create'),
    path('components/import/', component_import, name='component-import'),
    path('components/export/', component_export, name='component-export'),
    path('components/<int:pk>/', component_detail, name='component-detail'),

    # Accessory endpoints
    path('accessories/', accessory_list_create, name='accessory-list-create'),
    path('accessories/import/', accessory_import, name='accessory-import'),
    path('accessories/export/', accessory_export, name='accessory-export'),
    path('accessories/<int:pk>/', accessory_detail, name='accessory-detail'),
]
