from backend.core.filters import AllAwareCharFilter, SearchFilterSet
from .models import IAMAccount


class IAMAccountFilter(SearchFilterSet):
    search_fields = ('requestor', 'knox_id', 'approval_id', 'cloud_platform', 'project_accounts')

    status = AllAwareCharFilter(field_name='status')
    cloud_platform = AllAwareCharFilter(field_name='cloud_platform')
    project_accounts = AllAwareCharFilter(field_name='project_accounts')

    class Meta:
        model = IAMAccount
        fields = ['search', 'status', 'cloud_platform', 'project_accounts']
