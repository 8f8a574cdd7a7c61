"""
Django template tags and filters for the Recognition Platform

Custom filters for:
- Dictionary access in templates
- Category titles from the award catalog
- Avatar URLs and chart bar sizes
"""

from urllib.parse import quote

from django import template

from recognition.catalog import CATALOG

register = template.Library()


@register.filter
def get_item(dictionary, key):
    """
    Get item from dictionary by key in templates.
    Usage: {{ my_dict|get_item:my_key }}

    Returns:
        Value at key or empty string if not found
    """
    if isinstance(dictionary, dict):
        return dictionary.get(str(key), '')
    return ''


@register.filter
def category_title(category_id):
    """Usage: {{ record.category_id|category_title }}"""
    return CATALOG.category_title(str(category_id))


@register.filter
def avatar_url(name, size=150):
    """Generated initials avatar for a nominee name."""
    return (
        f"https://ui-avatars.com/api/?name={quote(str(name))}"
        f"&background=random&color=fff&size={size}"
    )


@register.filter
def bar_width(count, maximum):
    """
    Width of a chart bar as a percentage of the largest bar.
    Usage: style="width: {{ item.count|bar_width:max_count }}%"
    """
    try:
        maximum = max(int(maximum), 1)
        return round(int(count) * 100 / maximum)
    except (TypeError, ValueError):
        return 0
