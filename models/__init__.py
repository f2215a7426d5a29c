"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .ingredient import Ingredient, IngredientTag
from .menu import MenuItem, MenuIngredient
from .alert import MarginAlert

__all__ = [
    'db',
    'Ingredient',
    'IngredientTag',
    'MenuItem',
    'MenuIngredient',
    'MarginAlert',
]
