"""
Ingredient Models

Contains the Ingredient and IngredientTag models for the catalog of raw
ingredients and their alternate names.
"""

from .base import db


class Ingredient(db.Model):
    """
    Catalog ingredient with its most recent observed price.

    Price fields:
    - last_price: amount paid in the most recent observation
    - price_per_unit: last_price divided by the observed quantity
    - previous_price: last_price as it was before the most recent observation
    """
    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.String(64), nullable=True, index=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    category = db.Column(db.String(50), default='other', index=True)

    # Unit the price is quoted per (kg, ml, 개, ...)
    unit = db.Column(db.String(20), default='kg')

    last_price = db.Column(db.Float, default=0.0)
    price_per_unit = db.Column(db.Float, default=0.0)
    previous_price = db.Column(db.Float, default=0.0)
    price_updated_at = db.Column(db.DateTime, nullable=True)

    tags = db.relationship('IngredientTag', backref='ingredient', lazy=True,
                           cascade='all, delete-orphan', order_by='IngredientTag.id')

    @property
    def tag_names(self):
        return [t.tag for t in self.tags]

    def to_dict(self):
        return {
            'id': self.id,
            'store_id': self.store_id,
            'name': self.name,
            'category': self.category,
            'unit': self.unit,
            'tags': self.tag_names,
            'last_price': self.last_price,
            'price_per_unit': self.price_per_unit,
            'previous_price': self.previous_price,
            'price_updated_at': self.price_updated_at.isoformat() if self.price_updated_at else None,
        }


class IngredientTag(db.Model):
    """Alternate name for an ingredient (e.g., '#양파', 'onion')."""
    id = db.Column(db.Integer, primary_key=True)
    tag = db.Column(db.String(100), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False, index=True)
