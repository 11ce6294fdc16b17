"""
Cache invalidation signals
Automatically invalidate list caches when data changes
"""
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging
import threading
from contextlib import contextmanager

from backend.inventory.models import Asset, Component, Accessory
from backend.virtualization.models import VirtualMachine
from backend.iam.models import IAMAccount
from .cache_utils import invalidate_list_cache

logger = logging.getLogger(__name__)

CACHED_LIST_MODELS = (Asset, Component, Accessory, VirtualMachine, IAMAccount)

# Cached lists that embed user fields, e.g. the accessory borrower's username
USER_DEPENDENT_MODELS = (Accessory,)

# Thread-local storage to track signal suspension
_thread_locals = threading.local()


@contextmanager
def suspend_cache_signals():
    """
    Context manager to temporarily suspend cache invalidation signals.
    Useful for bulk operations to prevent excessive cache clearing.
    Remember to manually invalidate cache after the block!
    """
    previous = is_suspended()
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = previous


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


@receiver(post_save)
@receiver(post_delete)
def invalidate_on_change(sender, **kwargs):
    if is_suspended():
        return
    if sender in CACHED_LIST_MODELS:
        invalidate_list_cache(sender)
    elif sender is get_user_model():
        # Deleting a user nulls assigned_to with a bulk update, which sends no signal for Accessory
        for model in USER_DEPENDENT_MODELS:
            invalidate_list_cache(model)
