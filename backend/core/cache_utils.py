"""
List caching utilities.

List responses are cached per query string. Each model's lists share a
generation counter; bumping the counter orphans every cached page at once,
which works the same on Redis and on the local-memory backend.
"""
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
LIST_CACHE_TTL = 120  # 2 minutes


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def list_cache_prefix(model):
    """Cache prefix for a model's list pages, e.g. 'iam.iamaccount_list'"""
    return f"{model._meta.label_lower}_list"


def _version_key(prefix):
    return f"{prefix}:version"


def get_cache_version(prefix):
    version = cache.get(_version_key(prefix))
    if version is None:
        version = 1
        cache.set(_version_key(prefix), version, None)
    return version


def bump_cache_version(prefix):
    """Invalidate every cached page under ``prefix``"""
    try:
        version = cache.incr(_version_key(prefix))
    except ValueError:
        version = 2
        cache.set(_version_key(prefix), version, None)
    logger.debug(f"Invalidated list cache {prefix} (now version {version})")
    return version


def invalidate_list_cache(model):
    return bump_cache_version(list_cache_prefix(model))


def cached_list(request, model, build, ttl=LIST_CACHE_TTL):
    """
    Return the cached list payload for this request's query string, calling
    ``build()`` on a miss.
    """
    prefix = list_cache_prefix(model)
    params = sorted((key, tuple(values)) for key, values in request.query_params.lists())
    cache_key = make_cache_key(prefix, get_cache_version(prefix), params)

    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for {prefix}: {cache_key}")
        return cached_data

    logger.debug(f"Cache MISS for {prefix}: {cache_key}")
    data = build()
    cache.set(cache_key, data, ttl)
    return data
