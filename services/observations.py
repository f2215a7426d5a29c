"""
Observation Parsing Service

Validates loosely-typed price records (manual form input or items returned
by the receipt extraction service) into strict observations.
"""

import json
import math
import re
from dataclasses import dataclass, asdict
from typing import Optional

from constants import UNIT_ALIASES, MAX_LENGTHS
from utils.sanitizer import sanitize_name, sanitize_text
from .errors import ValidationError


@dataclass
class ParsedIngredientObservation:
    """One observed purchase: `price` paid for `quantity` of `unit`."""
    name: str
    price: float
    quantity: Optional[float] = None
    unit: Optional[str] = None

    def to_dict(self):
        return asdict(self)


def canonical_unit(unit):
    """Map a unit spelling to its canonical token, None if unknown."""
    if unit is None:
        return None
    return UNIT_ALIASES.get(str(unit).strip().lower())


def _parse_number(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number', field=field)
    if isinstance(value, str):
        # Receipt amounts often carry thousands separators ("12,500")
        value = value.replace(',', '').strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number, got {value!r}', field=field)
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f'{field} must be finite', field=field)
    return number


def validate_observation(record):
    """
    Turn a dict (or an observation) into a ParsedIngredientObservation.

    Raises ValidationError for a missing name, a non-positive price or
    quantity, or a unit that is not in the alias table. Missing quantity
    and unit stay None; defaults are applied by the engine.
    """
    if isinstance(record, ParsedIngredientObservation):
        record = record.to_dict()
    if not isinstance(record, dict):
        raise ValidationError('observation must be an object')

    name = sanitize_name(record.get('name'), max_length=MAX_LENGTHS['ingredient_name'])
    if not name:
        raise ValidationError('name is required', field='name')

    if record.get('price') in (None, ''):
        raise ValidationError('price is required', field='price')
    price = _parse_number(record.get('price'), 'price')
    if price <= 0:
        raise ValidationError(f'price must be positive, got {price}', field='price')

    quantity = record.get('quantity')
    if quantity in (None, ''):
        quantity = None
    else:
        quantity = _parse_number(quantity, 'quantity')
        if quantity <= 0:
            raise ValidationError(f'quantity must be positive, got {quantity}', field='quantity')

    unit = record.get('unit')
    if unit in (None, ''):
        unit = None
    else:
        resolved = canonical_unit(unit)
        if resolved is None:
            raise ValidationError(f'unknown unit {unit!r}', field='unit')
        unit = resolved

    return ParsedIngredientObservation(name=name, price=price, quantity=quantity, unit=unit)


def parse_extraction_text(text):
    """
    Pull the item list out of the extraction service's reply.

    The reply is free text containing one JSON object shaped like
    {"items": [...], "total": ..., "merchant": ...}. Returns
    (items, meta) where items are the raw, not yet validated, records.
    """
    if not text:
        raise ValidationError('extraction text is empty')

    match = re.search(r'\{[\s\S]*\}', text)
    if not match:
        raise ValidationError('no JSON object found in extraction text')

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ValidationError(f'extraction text is not valid JSON: {e.msg}')

    items = parsed.get('items') if isinstance(parsed, dict) else None
    if not isinstance(items, list):
        raise ValidationError('extraction result has no item list', field='items')

    meta = {
        'total': parsed.get('total'),
        'merchant': sanitize_text(parsed.get('merchant'), max_length=100) or None,
    }
    return items, meta
