"""
Validation Constants

Whitelists for values accepted at the engine boundary.
"""

VALID_ALERT_TYPES = {'margin_danger', 'price_spike', 'cost_increase'}

VALID_SEVERITIES = {'info', 'warning', 'danger'}

VALID_QUADRANTS = ('star', 'cashcow', 'gem', 'dog', 'unpriced')

# Where a price observation came from
VALID_SOURCES = {'manual', 'expense_ocr', 'import'}

# Accepted unit spellings (lowercase input -> canonical unit)
UNIT_ALIASES = {
    'kg': 'kg', 'kilogram': 'kg', 'kilograms': 'kg', '킬로': 'kg', '키로': 'kg',
    'g': 'g', 'gram': 'g', 'grams': 'g', '그램': 'g',
    'ml': 'ml', 'milliliter': 'ml', 'milliliters': 'ml',
    'l': 'l', 'liter': 'l', 'liters': 'l', '리터': 'l',
    'lb': 'lb', 'lbs': 'lb', 'oz': 'oz',
    'ea': 'ea', 'each': 'ea', 'pcs': 'ea', 'piece': 'ea', 'pieces': 'ea',
    '개': '개', '박스': '박스', 'box': '박스', '봉': '봉', '팩': '팩', 'pack': '팩',
    '묶음': '묶음', '근': '근', '마리': '마리',
}

VALID_UNITS = set(UNIT_ALIASES.values())

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 100,
    'menu_name': 100,
    'tag': 100,
    'store_id': 64,
}

# Guard against division by zero when normalizing to a per-unit price
QUANTITY_EPSILON = 1e-9
