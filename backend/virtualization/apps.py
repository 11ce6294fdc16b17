from django.apps import AppConfig


class VirtualizationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'backend.virtualization'
    verbose_name = 'Virtual Machines'
