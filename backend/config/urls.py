"""
URL configuration for the asset manager backend.

Every app mounts its routes under /api/.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "IT Asset Manager Admin Panel"
admin.site.site_title = "IT Asset Manager Admin Portal"
admin.site.index_title = "Welcome to the IT Asset Manager Admin"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('backend.core.urls')),
    path('api/', include('backend.inventory.urls')),
    path('api/', include('backend.virtualization.urls')),
    path('api/', include('backend.iam.urls')),
]
