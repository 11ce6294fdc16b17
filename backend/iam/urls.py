from django.urls import path
from .views import (
    iam_account_list_create, iam_account_detail, iam_account_filter_options,
    iam_account_import, iam_account_export, iam_account_template,
)

urlpatterns = [
    path('iam-accounts/', iam_account_list_create, name='iam-account-list-create'),
    path('iam-accounts/filter-options/', iam_account_filter_options, name='iam-account-filter-options'),
    path('iam-accounts/import/', iam_account_import, name='iam-account-import'),
    path('iam-accounts/export/', iam_account_export, name='iam-account-export'),
    path('iam-accounts/template/', iam_account_template, name='iam-account-template'),
    path('iam-accounts/<int:pk>/', iam_account_detail, name='iam-account-detail'),
]
