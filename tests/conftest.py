"""
Shared fixtures: a testing app on in-memory SQLite, the catalog repository,
the propagation engine and a small seeded catalog.
"""

import pytest

from app import create_app
from models import db
from services import CatalogRepository, CostPropagationEngine


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repo(app):
    return CatalogRepository()


@pytest.fixture
def engine(repo):
    return CostPropagationEngine(repo)


def add_ingredient(repo, name, price_per_unit, unit='kg', tags=None, scope=None):
    return repo.create_ingredient(name=name, unit=unit, last_price=price_per_unit,
                                  price_per_unit=price_per_unit, tags=tags, scope=scope)


def add_menu(repo, engine, name, selling_price, links, safety_margin_percent=30.0, scope=None):
    """Create a menu item, link (ingredient, quantity) pairs and compute its cost."""
    menu = repo.create_menu_item(name=name, selling_price=selling_price,
                                 safety_margin_percent=safety_margin_percent, scope=scope)
    for ingredient, quantity in links:
        repo.link_ingredient(menu.id, ingredient.id, quantity)
    engine.recalculate_menu_cost(menu.id)
    repo.commit()
    return menu


@pytest.fixture
def onion(repo):
    ingredient = add_ingredient(repo, '양파', 1000)
    repo.commit()
    return ingredient


@pytest.fixture
def stew(repo, engine, onion):
    return add_menu(repo, engine, '김치찌개', 8000, [(onion, 0.3)])
