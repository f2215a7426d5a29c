"""
Margin Engine Application

Flask application factory and the JSON action routes over the margin
engine. Every route accepts an optional `store_id` used as the repository
scope. Responses use the {"success": ..., "data"/"error": ...} envelope.
"""

import logging
import math

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_migrate import Migrate

from config import get_config
from models import db
from services import (
    CatalogRepository,
    CostPropagationEngine,
    IngredientMatcher,
    NotFoundError,
    RepositoryError,
    ValidationError,
    classify,
    menu_stats_from_sales,
    parse_extraction_text,
    simulate,
    summarize,
)
from services.observations import canonical_unit
from utils import safe_float, sanitize_name, sanitize_scope, sanitize_tags

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__)


# ============================================
# HELPERS
# ============================================

def _body():
    return request.get_json(silent=True) or {}


def _scope():
    return sanitize_scope(request.args.get('store_id') or _body().get('store_id'))


def _ok(data, status=200):
    return jsonify({'success': True, 'data': data}), status


def _fail(message, status):
    return jsonify({'success': False, 'error': message}), status


def _repository():
    return CatalogRepository()


def _engine(repository=None):
    return CostPropagationEngine.from_config(repository or _repository(), current_app.config)


def _require_number(body, key, min_val=None):
    value = safe_float(body.get(key), default=None)
    if value is None or not math.isfinite(value):
        raise ValidationError(f'{key} must be a number', field=key)
    if min_val is not None and value < min_val:
        raise ValidationError(f'{key} must be at least {min_val}', field=key)
    return value


def _require_unit(value, default):
    if value in (None, ''):
        return default
    unit = canonical_unit(value)
    if unit is None:
        raise ValidationError(f'unknown unit {value!r}', field='unit')
    return unit


# ============================================
# INDEX
# ============================================

@api.route('/')
def index():
    return _ok({'service': 'margin-engine', 'status': 'ok'})


# ============================================
# MENU ITEMS
# ============================================

@api.route('/api/menus')
def menus_list():
    return _ok(_engine().menu_cost_analysis(_scope()))


@api.route('/api/menus/danger')
def menus_danger():
    return _ok(_engine().danger_menus(_scope()))


@api.route('/api/menus', methods=['POST'])
def menu_add():
    body = _body()
    name = sanitize_name(body.get('name'))
    if not name:
        raise ValidationError('menu name is required', field='name')

    repo = _repository()
    menu = repo.create_menu_item(
        name=name,
        selling_price=_require_number(body, 'selling_price', min_val=0),
        base_cost=safe_float(body.get('base_cost'), default=0.0, min_val=0.0),
        safety_margin_percent=safe_float(body.get('safety_margin_percent'),
                                         default=current_app.config['DEFAULT_SAFETY_MARGIN']),
        category=sanitize_name(body.get('category'), max_length=50) or 'other',
        scope=_scope(),
    )
    repo.commit()
    logger.info("Menu item %r created", menu.name)
    return _ok(menu.to_dict(), 201)


@api.route('/api/menus/<int:menu_id>/ingredients', methods=['POST'])
def menu_link_ingredient(menu_id):
    body = _body()
    ingredient_id = body.get('ingredient_id')
    if not isinstance(ingredient_id, int) or isinstance(ingredient_id, bool):
        raise ValidationError('ingredient_id must be an integer', field='ingredient_id')
    quantity = _require_number(body, 'quantity')
    if quantity <= 0:
        raise ValidationError('quantity must be positive', field='quantity')

    repo = _repository()
    link = repo.link_ingredient(menu_id, ingredient_id, quantity, _require_unit(body.get('unit'), 'kg'))
    affected = _engine(repo).recalculate_menu_cost(menu_id)
    repo.commit()
    return _ok({'link': link.to_dict(), 'menu': affected.to_dict()}, 201)


@api.route('/api/menus/<int:menu_id>/ingredients/<int:ingredient_id>', methods=['DELETE'])
def menu_unlink_ingredient(menu_id, ingredient_id):
    repo = _repository()
    repo.unlink_ingredient(menu_id, ingredient_id)
    affected = _engine(repo).recalculate_menu_cost(menu_id)
    repo.commit()
    return _ok({'menu': affected.to_dict()})


# ============================================
# INGREDIENTS
# ============================================

@api.route('/api/ingredients')
def ingredients_list():
    return _ok([ing.to_dict() for ing in _repository().get_ingredients(_scope())])


@api.route('/api/ingredients', methods=['POST'])
def ingredient_add():
    body = _body()
    name = sanitize_name(body.get('name'))
    if not name:
        raise ValidationError('ingredient name is required', field='name')

    matcher = IngredientMatcher()
    repo = _repository()
    ingredient = repo.create_ingredient(
        name=name,
        category=sanitize_name(body.get('category'), max_length=50) or matcher.infer_category(name),
        unit=_require_unit(body.get('unit'), canonical_unit(matcher.infer_unit(name)) or 'kg'),
        last_price=safe_float(body.get('last_price'), default=0.0, min_val=0.0),
        tags=sanitize_tags(body.get('tags')) or None,
        scope=_scope(),
    )
    repo.commit()
    logger.info("Ingredient %r created", ingredient.name)
    return _ok(ingredient.to_dict(), 201)


@api.route('/api/ingredients/<int:ingredient_id>/price', methods=['POST'])
def ingredient_price(ingredient_id):
    body = _body()
    price = _require_number(body, 'price')
    quantity = safe_float(body.get('quantity'), default=1.0)

    repo = _repository()
    engine = _engine(repo)
    update = engine.apply_price_observation(
        ingredient_id, price, quantity=quantity, unit=body.get('unit') or None,
        source=sanitize_name(body.get('source'), max_length=20) or 'manual')
    alerts = engine.raise_alerts(update, _scope())
    repo.commit()

    data = update.to_dict()
    data['alerts'] = [a.to_dict() for a in alerts]
    return _ok(data)


# ============================================
# OBSERVATION BATCHES
# ============================================

@api.route('/api/observations', methods=['POST'])
def observations_process():
    body = _body()
    meta = None
    if body.get('text'):
        items, meta = parse_extraction_text(body['text'])
    else:
        items = body.get('items')
    if not isinstance(items, list):
        raise ValidationError('items must be a list', field='items')

    auto_create = body.get('auto_create')
    threshold = safe_float(body.get('threshold'), default=None, min_val=0, max_val=100)

    result = _engine().process_observations(
        items,
        scope=_scope(),
        threshold=threshold,
        auto_create=bool(auto_create) if auto_create is not None else None,
        source=sanitize_name(body.get('source'), max_length=20) or 'expense_ocr',
    )
    data = result.to_dict()
    data['meta'] = meta
    return _ok(data)


# ============================================
# ALERTS
# ============================================

@api.route('/api/alerts')
def alerts_list():
    return _ok([a.to_dict() for a in _repository().list_unread_alerts(_scope())])


@api.route('/api/alerts/<int:alert_id>/read', methods=['POST'])
def alert_read(alert_id):
    repo = _repository()
    alert = repo.mark_alert_read(alert_id)
    repo.commit()
    return _ok(alert.to_dict())


@api.route('/api/alerts/<int:alert_id>/resolve', methods=['POST'])
def alert_resolve(alert_id):
    repo = _repository()
    alert = repo.resolve_alert(alert_id)
    repo.commit()
    return _ok(alert.to_dict())


# ============================================
# ANALYSIS
# ============================================

def _stats_from_body(items):
    stats = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f'item {position} must be an object', field='items')
        row = dict(item)
        for key in ('quantity_sold', 'total_profit'):
            row[key] = _require_number(item, key)
        row['cost'] = safe_float(item.get('cost'), default=0.0)
        row['margin'] = safe_float(item.get('margin'), default=0.0)
        stats.append(row)
    return stats


@api.route('/api/portfolio/classify', methods=['POST'])
def portfolio_classify():
    body = _body()
    if isinstance(body.get('sales'), dict):
        menus = _repository().get_menu_items_with_links(_scope())
        stats = menu_stats_from_sales(menus, body['sales'])
    elif isinstance(body.get('items'), list):
        stats = _stats_from_body(body['items'])
    else:
        raise ValidationError('send either items or sales', field='items')

    classified = classify(stats)
    return _ok({
        'items': classified,
        'summary': summarize(classified, current_app.config['DEFAULT_SAFETY_MARGIN']),
    })


@api.route('/api/simulate', methods=['POST'])
def price_simulate():
    body = _body()
    if body.get('menu_id') is not None:
        menu = _repository().get_menu_item(body['menu_id'])
        item = {'selling_price': menu.selling_price, 'cost': menu.current_cost or 0.0}
    else:
        item = {
            'selling_price': _require_number(body, 'selling_price', min_val=0),
            'cost': _require_number(body, 'cost', min_val=0),
        }
    quantity_sold = _require_number(body, 'quantity_sold', min_val=0)
    if not quantity_sold.is_integer():
        raise ValidationError('quantity_sold must be a whole number', field='quantity_sold')
    item['quantity_sold'] = int(quantity_sold)

    result = simulate(
        item,
        _require_number(body, 'price_delta'),
        elasticity=safe_float(body.get('elasticity'), default=current_app.config['DEFAULT_ELASTICITY']),
    )
    return _ok(result.to_dict())


# ============================================
# ERROR HANDLERS
# ============================================

def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        db.session.rollback()
        return _fail(str(e), 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        db.session.rollback()
        return _fail(str(e), 404)

    @app.errorhandler(RepositoryError)
    def handle_repository_error(e):
        db.session.rollback()
        logger.error("Repository failure: %s", e)
        return _fail('storage error', 500)


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))
    # Ingredient and menu names are mostly Korean
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)
    register_error_handlers(app)
    app.register_blueprint(api)
    return app


def init_db(app):
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


app = create_app()


if __name__ == '__main__':
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
