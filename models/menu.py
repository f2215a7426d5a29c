"""
Menu Models

Contains the MenuItem model and the MenuIngredient edge table that links
menu items to the ingredients they consume.
"""

from .base import db


class MenuItem(db.Model):
    """Menu item with its selling price and derived ingredient cost."""
    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.String(64), nullable=True, index=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    category = db.Column(db.String(50), default='other')
    selling_price = db.Column(db.Float, default=0.0)

    # Cost at creation time, informational only
    base_cost = db.Column(db.Float, default=0.0)

    # Always recomputed from links by the cost propagation engine
    current_cost = db.Column(db.Float, default=0.0)
    margin_percent = db.Column(db.Float, default=0.0)

    safety_margin_percent = db.Column(db.Float, default=30.0)
    is_active = db.Column(db.Boolean, default=True)

    links = db.relationship('MenuIngredient', backref='menu', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'store_id': self.store_id,
            'name': self.name,
            'category': self.category,
            'selling_price': self.selling_price,
            'base_cost': self.base_cost,
            'current_cost': self.current_cost,
            'margin_percent': self.margin_percent,
            'safety_margin_percent': self.safety_margin_percent,
            'is_active': self.is_active,
        }


class MenuIngredient(db.Model):
    """Edge of the cost graph: quantity of an ingredient used per sold menu item."""
    __table_args__ = (
        db.UniqueConstraint('menu_id', 'ingredient_id', name='uq_menu_ingredient'),
    )

    id = db.Column(db.Integer, primary_key=True)
    menu_id = db.Column(db.Integer, db.ForeignKey('menu_item.id', ondelete='CASCADE'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False, index=True)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), default='kg')
    ingredient = db.relationship('Ingredient')

    def to_dict(self):
        return {
            'menu_id': self.menu_id,
            'ingredient_id': self.ingredient_id,
            'quantity': self.quantity,
            'unit': self.unit,
        }
