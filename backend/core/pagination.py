"""
Page-number pagination for list endpoints.
"""
from django.conf import settings
from django.core.paginator import Paginator

ELLIPSIS = '...'


def get_page_numbers(current_page, total_pages):
    """
    Compact pager: every page when there are five or fewer, otherwise the first
    page, a window around the current page, the last page, and '...' for gaps.

    >>> get_page_numbers(5, 10)
    [1, '...', 4, 5, 6, '...', 10]
    """
    if total_pages <= 5:
        return list(range(1, total_pages + 1))

    pages = [1]
    if current_page > 3:
        pages.append(ELLIPSIS)
    for number in range(max(2, current_page - 1), min(total_pages - 1, current_page + 1) + 1):
        pages.append(number)
    if current_page < total_pages - 2:
        pages.append(ELLIPSIS)
    pages.append(total_pages)

    result = []
    for page in pages:
        if page == ELLIPSIS:
            if result and result[-1] == ELLIPSIS:
                continue
        elif page in result:
            continue
        result.append(page)
    return result


def _int_param(request, name, default):
    try:
        return int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default


def paginate(request, queryset, serializer_class, context=None):
    """Serialize one page of ``queryset`` using ?page= and ?limit="""
    page = max(1, _int_param(request, 'page', 1))
    limit = _int_param(request, 'limit', settings.DEFAULT_PAGE_SIZE)
    limit = max(1, min(limit, settings.MAX_PAGE_SIZE))

    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(page)

    serializer = serializer_class(page_obj, many=True, context=context or {'request': request})
    return {
        'results': serializer.data,
        'count': paginator.count,
        'next': page_obj.next_page_number() if page_obj.has_next() else None,
        'previous': page_obj.previous_page_number() if page_obj.has_previous() else None,
        'page': page_obj.number,
        'page_size': limit,
        'total_pages': paginator.num_pages,
        'page_numbers': get_page_numbers(page_obj.number, paginator.num_pages),
    }
