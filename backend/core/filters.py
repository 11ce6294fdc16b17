import django_filters
from django.db.models import Q


class AllAwareCharFilter(django_filters.CharFilter):
    """Exact-match filter where the value 'all' (any case) means no filtering"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('lookup_expr', 'exact')
        super().__init__(*args, **kwargs)

    def filter(self, qs, value):
        if value and value.strip().lower() == 'all':
            return qs
        return super().filter(qs, value)


class SearchFilterSet(django_filters.FilterSet):
    """FilterSet with a ?search= that does icontains across ``search_fields``"""

    search_fields = ()

    search = django_filters.CharFilter(method='filter_search', label='Search')

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        query = Q()
        for field in self.search_fields:
            query |= Q(**{f'{field}__icontains': value})
        return queryset.filter(query)
