"""
Constants Package

Data tables for name normalization, category inference and validation.
"""

from .locale import LOCALES, DEFAULT_LOCALE, KOREAN, ENGLISH

from .categories import (
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    UNIT_DEFAULT_KEYWORDS,
    DEFAULT_UNIT,
)

from .validation import (
    VALID_ALERT_TYPES,
    VALID_SEVERITIES,
    VALID_QUADRANTS,
    VALID_SOURCES,
    UNIT_ALIASES,
    VALID_UNITS,
    MAX_LENGTHS,
    QUANTITY_EPSILON,
)

__all__ = [
    # Locale
    'LOCALES',
    'DEFAULT_LOCALE',
    'KOREAN',
    'ENGLISH',
    # Categories
    'CATEGORY_KEYWORDS',
    'DEFAULT_CATEGORY',
    'UNIT_DEFAULT_KEYWORDS',
    'DEFAULT_UNIT',
    # Validation
    'VALID_ALERT_TYPES',
    'VALID_SEVERITIES',
    'VALID_QUADRANTS',
    'VALID_SOURCES',
    'UNIT_ALIASES',
    'VALID_UNITS',
    'MAX_LENGTHS',
    'QUANTITY_EPSILON',
]
