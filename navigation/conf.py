# backend/navigation/conf.py
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .tree import DEFAULT_MAX_DEPTH


def get_max_depth() -> int:
    """NAVIGATION_MAX_MENU_DEPTH, validated (levels, root level included)."""
    value = getattr(settings, "NAVIGATION_MAX_MENU_DEPTH", DEFAULT_MAX_DEPTH)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ImproperlyConfigured("NAVIGATION_MAX_MENU_DEPTH must be an integer.")
    if value < 1:
        raise ImproperlyConfigured("NAVIGATION_MAX_MENU_DEPTH must be at least 1.")
    return value
