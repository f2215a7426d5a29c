"""
Catalog Repository

Reads and writes ingredients, menu items, cost-graph links and alerts
through the Flask-SQLAlchemy session. Every read takes an explicit store
scope; None or 'ALL' means no store filter.
"""

from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from constants import VALID_ALERT_TYPES, VALID_SEVERITIES, VALID_UNITS
from models import db, Ingredient, IngredientTag, MenuItem, MenuIngredient, MarginAlert
from .errors import NotFoundError, RepositoryError, ValidationError

ALL_STORES = 'ALL'

INGREDIENT_PRICE_FIELDS = {'last_price', 'price_per_unit', 'previous_price', 'unit', 'price_updated_at'}


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _scoped(query, model, scope):
    if scope and scope != ALL_STORES:
        query = query.filter(model.store_id == scope)
    return query


class CatalogRepository:
    """Persistence boundary of the margin engine."""

    def __init__(self, session=None):
        self.session = session or db.session

    # ---- transactions ----

    def flush(self):
        try:
            self.session.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f'flush failed: {e}') from e

    def commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(f'commit failed: {e}') from e

    def rollback(self):
        self.session.rollback()

    # ---- ingredients ----

    def get_ingredients(self, scope=None):
        query = _scoped(Ingredient.query, Ingredient, scope)
        return query.order_by(Ingredient.id).all()

    def catalog_entries(self, scope=None):
        """Ingredients as the plain {'id', 'name', 'tags'} records the matcher ranks."""
        return [
            {'id': ing.id, 'name': ing.name, 'tags': ing.tag_names}
            for ing in self.get_ingredients(scope)
        ]

    def get_ingredient(self, ingredient_id):
        ingredient = self.session.get(Ingredient, ingredient_id)
        if ingredient is None:
            raise NotFoundError('ingredient', ingredient_id)
        return ingredient

    def create_ingredient(self, name, category='other', unit='kg', last_price=0.0,
                          price_per_unit=None, tags=None, scope=None, price_updated_at=None):
        """Create an ingredient. Without explicit tags it gets '#<name>'."""
        if scope == ALL_STORES:
            scope = None
        ingredient = Ingredient(
            store_id=scope,
            name=name,
            category=category,
            unit=unit,
            last_price=last_price,
            price_per_unit=last_price if price_per_unit is None else price_per_unit,
            previous_price=0.0,
            price_updated_at=price_updated_at,
        )
        for tag in (tags or [f'#{name}']):
            ingredient.tags.append(IngredientTag(tag=tag))
        self.session.add(ingredient)
        self.flush()
        return ingredient

    def save_ingredient_price(self, ingredient_id, fields):
        ingredient = self.get_ingredient(ingredient_id)
        for key, value in fields.items():
            if key not in INGREDIENT_PRICE_FIELDS:
                raise ValueError(f'{key} is not a price field')
            setattr(ingredient, key, value)
        self.flush()
        return ingredient

    # ---- menu items and links ----

    def get_menu_item(self, menu_id):
        menu = self.session.get(MenuItem, menu_id)
        if menu is None:
            raise NotFoundError('menu item', menu_id)
        return menu

    def get_menu_items_with_links(self, scope=None, active_only=True):
        query = _scoped(MenuItem.query, MenuItem, scope)
        if active_only:
            query = query.filter(MenuItem.is_active.is_(True))
        return query.order_by(MenuItem.name, MenuItem.id).all()

    def create_menu_item(self, name, selling_price, base_cost=0.0, safety_margin_percent=30.0,
                         category='other', scope=None, margin_percent=0.0):
        if scope == ALL_STORES:
            scope = None
        menu = MenuItem(
            store_id=scope,
            name=name,
            category=category,
            selling_price=selling_price,
            base_cost=base_cost,
            current_cost=base_cost,
            margin_percent=margin_percent,
            safety_margin_percent=safety_margin_percent,
        )
        self.session.add(menu)
        self.flush()
        return menu

    def get_menu_ids_for_ingredient(self, ingredient_id):
        rows = (MenuIngredient.query
                .with_entities(MenuIngredient.menu_id)
                .filter(MenuIngredient.ingredient_id == ingredient_id)
                .order_by(MenuIngredient.menu_id)
                .all())
        return [row.menu_id for row in rows]

    def get_links_for_menu(self, menu_id):
        """All current links of a menu, read fresh from the database."""
        return (MenuIngredient.query
                .filter(MenuIngredient.menu_id == menu_id)
                .order_by(MenuIngredient.id)
                .all())

    def link_ingredient(self, menu_id, ingredient_id, quantity, unit='kg'):
        """Create or update the (menu, ingredient) edge."""
        if unit not in VALID_UNITS:
            raise ValidationError(f'unknown unit {unit!r}', field='unit')
        self.get_menu_item(menu_id)
        self.get_ingredient(ingredient_id)
        link = MenuIngredient.query.filter_by(menu_id=menu_id, ingredient_id=ingredient_id).first()
        if link is None:
            link = MenuIngredient(menu_id=menu_id, ingredient_id=ingredient_id)
            self.session.add(link)
        link.quantity = quantity
        link.unit = unit
        self.flush()
        return link

    def unlink_ingredient(self, menu_id, ingredient_id):
        link = MenuIngredient.query.filter_by(menu_id=menu_id, ingredient_id=ingredient_id).first()
        if link is None:
            raise NotFoundError('menu ingredient link', f'{menu_id}/{ingredient_id}')
        self.session.delete(link)
        self.flush()

    def save_menu_cost(self, menu_id, current_cost, margin_percent):
        menu = self.get_menu_item(menu_id)
        menu.current_cost = current_cost
        menu.margin_percent = margin_percent
        self.flush()
        return menu

    # ---- alerts ----

    def insert_alert(self, fields):
        if fields.get('alert_type') not in VALID_ALERT_TYPES:
            raise ValidationError(f"unknown alert type {fields.get('alert_type')!r}", field='alert_type')
        if fields.get('severity') not in VALID_SEVERITIES:
            raise ValidationError(f"unknown severity {fields.get('severity')!r}", field='severity')
        alert = MarginAlert(created_at=utcnow(), is_read=False, is_resolved=False, **fields)
        self.session.add(alert)
        self.flush()
        return alert

    def get_alert(self, alert_id):
        alert = self.session.get(MarginAlert, alert_id)
        if alert is None:
            raise NotFoundError('alert', alert_id)
        return alert

    def list_unread_alerts(self, scope=None):
        query = _scoped(MarginAlert.query, MarginAlert, scope)
        return (query.filter(MarginAlert.is_read.is_(False))
                .order_by(MarginAlert.created_at.desc(), MarginAlert.id.desc())
                .all())

    def mark_alert_read(self, alert_id):
        alert = self.get_alert(alert_id)
        alert.is_read = True
        self.flush()
        return alert

    def resolve_alert(self, alert_id):
        alert = self.get_alert(alert_id)
        alert.is_read = True
        alert.is_resolved = True
        alert.resolved_at = utcnow()
        self.flush()
        return alert
