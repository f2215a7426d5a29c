"""
Input Sanitization Module

Cleans loosely-typed values coming from forms, JSON bodies and the external
receipt extraction step before they reach the engine.
"""

import re

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=255):
    """
    Strip control characters and surrounding whitespace, collapse internal
    whitespace and truncate.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 255)

    Returns:
        Sanitized string, possibly empty
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text)
    text = re.sub(r'\s+', ' ', text).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def sanitize_name(name, max_length=100):
    """Sanitize an ingredient or menu name. Returns '' when nothing is left."""
    return sanitize_text(name, max_length=max_length)


def sanitize_tags(tags, max_length=100):
    """
    Sanitize a tag list. Accepts a list or a comma separated string and
    drops empty and duplicate entries while keeping order.
    """
    if not tags:
        return []

    if isinstance(tags, str):
        tags = tags.split(',')

    cleaned = []
    for tag in tags:
        tag = sanitize_text(tag, max_length=max_length)
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def sanitize_scope(store_id, max_length=64):
    """Store identifier used as repository scope, None when blank."""
    store_id = sanitize_text(store_id, max_length=max_length)
    return store_id or None


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value not in (None, '') else default
        if result is None:
            return None
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default
