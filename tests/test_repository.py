import pytest

from services.errors import NotFoundError, ValidationError

from conftest import add_ingredient


def test_default_tag(repo):
    ingredient = add_ingredient(repo, '양파', 1000)
    assert ingredient.tag_names == ['#양파']


def test_explicit_tags(repo):
    ingredient = add_ingredient(repo, '대파', 3000, tags=['#파', 'green onion'])
    assert repo.catalog_entries() == [{'id': ingredient.id, 'name': '대파', 'tags': ['#파', 'green onion']}]


def test_all_scope_is_stored_unscoped(repo):
    ingredient = add_ingredient(repo, '소금', 500, scope='ALL')
    assert ingredient.store_id is None
    assert repo.get_ingredients('store-a') == []
    assert repo.get_ingredients('ALL') == [ingredient]


def test_save_ingredient_price_rejects_other_fields(repo, onion):
    with pytest.raises(ValueError):
        repo.save_ingredient_price(onion.id, {'name': '감자'})


def test_link_is_upserted(repo, onion, stew):
    repo.link_ingredient(stew.id, onion.id, 0.5)
    links = repo.get_links_for_menu(stew.id)
    assert len(links) == 1
    assert links[0].quantity == 0.5


def test_link_rejects_unknown_unit(repo, onion, stew):
    with pytest.raises(ValidationError):
        repo.link_ingredient(stew.id, onion.id, 0.5, unit='cup')


@pytest.mark.parametrize('call', [
    lambda repo: repo.get_ingredient(999),
    lambda repo: repo.get_menu_item(999),
    lambda repo: repo.get_alert(999),
    lambda repo: repo.unlink_ingredient(1, 999),
])
def test_missing_ids(repo, call):
    with pytest.raises(NotFoundError):
        call(repo)


@pytest.mark.parametrize('fields', [
    {'alert_type': 'price_drop', 'severity': 'info', 'message': 'x'},
    {'alert_type': 'cost_increase', 'severity': 'critical', 'message': 'x'},
])
def test_insert_alert_validates_type_and_severity(repo, fields):
    with pytest.raises(ValidationError):
        repo.insert_alert(fields)


def test_unread_alerts_newest_first(repo):
    first = repo.insert_alert({'alert_type': 'cost_increase', 'severity': 'info', 'message': 'a'})
    second = repo.insert_alert({'alert_type': 'cost_increase', 'severity': 'info', 'message': 'b'})
    assert [a.id for a in repo.list_unread_alerts()] == [second.id, first.id]

    repo.mark_alert_read(second.id)
    assert [a.id for a in repo.list_unread_alerts()] == [first.id]


def test_inactive_menus_are_skipped(repo, engine, stew):
    stew.is_active = False
    repo.flush()
    assert repo.get_menu_items_with_links() == []
    assert repo.get_menu_items_with_links(active_only=False) == [stew]
