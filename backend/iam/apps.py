from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'backend.iam'
    verbose_name = 'IAM Accounts'
