from django.urls import path
from .views import vm_list_create, vm_detail, vm_import, vm_export

urlpatterns = [
    path('vms/', vm_list_create, name='vm-list-create'),
    path('vms/import/', vm_import, name='vm-import'),
    path('vms/export/', vm_export, name='vm-export'),
    path('vms/<int:pk>/', vm_detail, name='vm-detail'),
]
