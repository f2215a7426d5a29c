"""
Margin Alert Model

Alerts are inserted by the cost propagation engine and afterwards only
touched by read/resolve actions.
"""

from .base import db


class MarginAlert(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.String(64), nullable=True, index=True)
    menu_id = db.Column(db.Integer, db.ForeignKey('menu_item.id', ondelete='SET NULL'), nullable=True, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='SET NULL'), nullable=True, index=True)

    # 'margin_danger', 'price_spike' or 'cost_increase'
    alert_type = db.Column(db.String(20), nullable=False)
    # 'info', 'warning' or 'danger'
    severity = db.Column(db.String(10), nullable=False)
    message = db.Column(db.String(255), nullable=False)

    old_value = db.Column(db.Float, nullable=True)
    new_value = db.Column(db.Float, nullable=True)
    change_percent = db.Column(db.Float, nullable=True)

    is_read = db.Column(db.Boolean, default=False, index=True)
    is_resolved = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, nullable=False)
    resolved_at = db.Column(db.DateTime, nullable=True)

    menu = db.relationship('MenuItem')
    ingredient = db.relationship('Ingredient')

    def to_dict(self):
        return {
            'id': self.id,
            'store_id': self.store_id,
            'menu_id': self.menu_id,
            'ingredient_id': self.ingredient_id,
            'alert_type': self.alert_type,
            'severity': self.severity,
            'message': self.message,
            'old_value': self.old_value,
            'new_value': self.new_value,
            'change_percent': self.change_percent,
            'is_read': self.is_read,
            'is_resolved': self.is_resolved,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'resolved_at': self.resolved_at.isoformat() if self.resolved_at else None,
        }
