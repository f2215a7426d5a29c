"""
Cost Propagation Service

Applies accepted price observations to the ingredient catalog, recomputes
the cost and margin of every menu item that uses the changed ingredient,
and turns dangerous margins into alerts.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List

from constants import VALID_SOURCES
from .cost import (
    DEFAULT_SAFETY_MARGIN,
    calculate_margin_percent,
    calculate_menu_cost,
    calculate_price_per_unit,
)
from .errors import NotFoundError, RepositoryError, ValidationError
from .matching import IngredientMatcher, DEFAULT_THRESHOLD
from .observations import canonical_unit, validate_observation
from .repository import utcnow

logger = logging.getLogger(__name__)

MARGIN_DANGER_TEMPLATE = '{menu_name} margin is in danger! (now {new_margin:.1f}%)'
PRICE_SPIKE_TEMPLATE = '{ingredient_name} price jumped {change_percent:.1f}% per {unit}'

# Number of below-threshold candidates offered for manual confirmation
SUGGESTION_LIMIT = 3


@dataclass
class AffectedMenu:
    menu_id: int
    menu_name: str
    old_cost: float
    new_cost: float
    old_margin: float
    new_margin: float
    is_danger: bool

    def to_dict(self):
        return {
            'menu_id': self.menu_id,
            'menu_name': self.menu_name,
            'old_cost': self.old_cost,
            'new_cost': self.new_cost,
            'old_margin': self.old_margin,
            'new_margin': self.new_margin,
            'is_danger': self.is_danger,
        }


@dataclass
class PriceUpdate:
    ingredient: object
    old_price_per_unit: float
    affected_menus: List[AffectedMenu] = field(default_factory=list)

    def to_dict(self):
        return {
            'ingredient': self.ingredient.to_dict(),
            'affected_menus': [m.to_dict() for m in self.affected_menus],
        }


@dataclass
class BatchResult:
    matched: list = field(default_factory=list)
    unmatched: list = field(default_factory=list)
    created: list = field(default_factory=list)
    alerts: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    def to_dict(self):
        return {
            'matched': self.matched,
            'unmatched': self.unmatched,
            'created': self.created,
            'alerts': [a.to_dict() for a in self.alerts],
            'failed': self.failed,
        }


class CostPropagationEngine:
    """
    Keeps menu costs in step with ingredient prices.

    The engine holds no state of its own: every read and write goes through
    the repository, and a menu's cost is always rebuilt from all of its
    current links rather than patched incrementally.
    """

    def __init__(self, repository, matcher=None, match_threshold=DEFAULT_THRESHOLD,
                 auto_create=False, price_spike_percent=None,
                 margin_message=MARGIN_DANGER_TEMPLATE, spike_message=PRICE_SPIKE_TEMPLATE):
        self.repository = repository
        self.matcher = matcher or IngredientMatcher()
        self.match_threshold = match_threshold
        self.auto_create = auto_create
        self.price_spike_percent = price_spike_percent
        self.margin_message = margin_message
        self.spike_message = spike_message

    @classmethod
    def from_config(cls, repository, config):
        """Build an engine from a Flask config mapping."""
        return cls(
            repository,
            match_threshold=config.get('MATCH_THRESHOLD', DEFAULT_THRESHOLD),
            auto_create=config.get('AUTO_CREATE_UNMATCHED', False),
            price_spike_percent=config.get('PRICE_SPIKE_PERCENT'),
        )

    # ---- single observation ----

    def apply_price_observation(self, ingredient_id, new_price, quantity=1, unit=None, source='manual'):
        """
        Record that `quantity` of an ingredient was bought for `new_price`.

        Updates the ingredient's price fields and recomputes every menu
        that links to it. Returns a PriceUpdate listing old and new margins
        for all affected menus, dangerous or not. Does not commit.
        """
        if new_price is None or not math.isfinite(new_price) or new_price <= 0:
            raise ValidationError(f'price must be positive, got {new_price}', field='price')
        if quantity is None:
            quantity = 1
        if not math.isfinite(quantity) or quantity <= 0:
            raise ValidationError(f'quantity must be positive, got {quantity}', field='quantity')
        if source not in VALID_SOURCES:
            raise ValidationError(f'unknown source {source!r}', field='source')

        ingredient = self.repository.get_ingredient(ingredient_id)

        if unit is None:
            unit = ingredient.unit
        else:
            resolved = canonical_unit(unit)
            if resolved is None:
                raise ValidationError(f'unknown unit {unit!r}', field='unit')
            unit = resolved

        old_price_per_unit = ingredient.price_per_unit or 0.0
        price_per_unit = calculate_price_per_unit(new_price, quantity)

        ingredient = self.repository.save_ingredient_price(ingredient_id, {
            'previous_price': ingredient.last_price or 0.0,
            'last_price': new_price,
            'price_per_unit': price_per_unit,
            'unit': unit,
            'price_updated_at': utcnow(),
        })
        logger.info("Price of %s set to %.2f per %s (source=%s)",
                    ingredient.name, price_per_unit, unit, source)

        update = PriceUpdate(ingredient=ingredient, old_price_per_unit=old_price_per_unit)
        for menu_id in self.repository.get_menu_ids_for_ingredient(ingredient_id):
            update.affected_menus.append(self.recalculate_menu_cost(menu_id))
        return update

    def recalculate_menu_cost(self, menu_id):
        """Rebuild one menu's cost from all of its links and store the new margin."""
        menu = self.repository.get_menu_item(menu_id)
        old_cost = menu.current_cost or 0.0
        old_margin = calculate_margin_percent(menu.selling_price, old_cost)

        new_cost = calculate_menu_cost(self.repository.get_links_for_menu(menu_id))
        new_margin = calculate_margin_percent(menu.selling_price, new_cost)

        self.repository.save_menu_cost(menu_id, new_cost, new_margin)

        safety = menu.safety_margin_percent
        if safety is None:
            safety = DEFAULT_SAFETY_MARGIN
        return AffectedMenu(
            menu_id=menu.id,
            menu_name=menu.name,
            old_cost=old_cost,
            new_cost=new_cost,
            old_margin=old_margin,
            new_margin=new_margin,
            is_danger=new_margin < safety,
        )

    # ---- alerting policy ----

    def raise_alerts(self, update, scope=None):
        """
        Insert one margin_danger alert per dangerous menu in `update`, plus a
        price_spike alert when spike detection is configured and triggered.
        """
        ingredient = update.ingredient
        store_id = scope if scope and scope != 'ALL' else ingredient.store_id
        alerts = []

        for affected in update.affected_menus:
            if not affected.is_danger:
                continue
            alert = self.repository.insert_alert({
                'store_id': store_id,
                'menu_id': affected.menu_id,
                'ingredient_id': ingredient.id,
                'alert_type': 'margin_danger',
                'severity': 'danger',
                'message': self.margin_message.format(
                    menu_name=affected.menu_name, new_margin=affected.new_margin),
                'old_value': affected.old_margin,
                'new_value': affected.new_margin,
                'change_percent': affected.new_margin - affected.old_margin,
            })
            logger.info("Margin alert for %s: %.1f%% -> %.1f%%",
                        affected.menu_name, affected.old_margin, affected.new_margin)
            alerts.append(alert)

        spike = self._price_spike_percent(update)
        if spike is not None:
            alerts.append(self.repository.insert_alert({
                'store_id': store_id,
                'menu_id': None,
                'ingredient_id': ingredient.id,
                'alert_type': 'price_spike',
                'severity': 'warning',
                'message': self.spike_message.format(
                    ingredient_name=ingredient.name, change_percent=spike, unit=ingredient.unit),
                'old_value': update.old_price_per_unit,
                'new_value': ingredient.price_per_unit,
                'change_percent': spike,
            }))
            logger.info("Price spike alert for %s: +%.1f%%", ingredient.name, spike)

        return alerts

    def _price_spike_percent(self, update):
        if self.price_spike_percent is None or update.old_price_per_unit <= 0:
            return None
        change = (update.ingredient.price_per_unit - update.old_price_per_unit) / update.old_price_per_unit * 100
        if change >= self.price_spike_percent:
            return change
        return None

    # ---- batch ----

    def process_observations(self, observations, scope=None, threshold=None, auto_create=None,
                             source='expense_ocr'):
        """
        Match, apply and alert for a list of loosely-typed observations.

        Each observation is committed on its own; a failing observation is
        rolled back, reported under `failed` and does not stop the batch.
        Unmatched observations are either returned for manual confirmation
        with suggestions, or created as new ingredients when auto_create is on.
        """
        if not observations:
            raise ValidationError('observation list is empty', field='observations')
        if threshold is None:
            threshold = self.match_threshold
        if auto_create is None:
            auto_create = self.auto_create

        result = BatchResult()
        catalog = self.repository.catalog_entries(scope)

        for index, record in enumerate(observations):
            try:
                observation = validate_observation(record)
                match = self.matcher.best_match(observation.name, catalog, threshold)

                if match is not None:
                    update = self.apply_price_observation(
                        match.ingredient_id, observation.price,
                        quantity=observation.quantity, unit=observation.unit, source=source)
                    alerts = self.raise_alerts(update, scope)
                    self.repository.commit()
                    result.matched.append({
                        'observation': observation.to_dict(),
                        'match': match.to_dict(),
                        'ingredient': update.ingredient.to_dict(),
                        'affected_menus': [m.to_dict() for m in update.affected_menus],
                    })
                    result.alerts.extend(alerts)
                elif auto_create:
                    ingredient = self._create_from_observation(observation, scope)
                    self.repository.commit()
                    catalog.append({'id': ingredient.id, 'name': ingredient.name,
                                    'tags': ingredient.tag_names})
                    result.created.append({
                        'observation': observation.to_dict(),
                        'ingredient': ingredient.to_dict(),
                    })
                else:
                    suggestions = self.matcher.find_best_matches(observation.name, catalog, threshold=0)
                    result.unmatched.append({
                        'observation': observation.to_dict(),
                        'suggestions': [s.to_dict() for s in suggestions[:SUGGESTION_LIMIT]],
                    })
            except (ValidationError, NotFoundError, RepositoryError) as e:
                self.repository.rollback()
                logger.warning("Observation %d rejected: %s", index, e)
                result.failed.append({
                    'index': index,
                    'observation': record if isinstance(record, dict) else str(record),
                    'error': type(e).__name__,
                    'reason': str(e),
                    'field': getattr(e, 'field', None),
                })

        logger.info("Processed %d observations: %d matched, %d created, %d unmatched, %d failed",
                    len(observations), len(result.matched), len(result.created),
                    len(result.unmatched), len(result.failed))
        return result

    def _create_from_observation(self, observation, scope):
        quantity = observation.quantity or 1
        unit = observation.unit or canonical_unit(self.matcher.infer_unit(observation.name)) \
            or self.matcher.default_unit
        return self.repository.create_ingredient(
            name=observation.name,
            category=self.matcher.infer_category(observation.name),
            unit=unit,
            last_price=observation.price,
            price_per_unit=calculate_price_per_unit(observation.price, quantity),
            scope=scope,
            price_updated_at=utcnow(),
        )

    # ---- analysis ----

    def menu_cost_analysis(self, scope=None):
        """Every active menu with its current margin and danger flag."""
        analysis = []
        for menu in self.repository.get_menu_items_with_links(scope):
            margin = calculate_margin_percent(menu.selling_price, menu.current_cost or 0.0)
            row = menu.to_dict()
            row['current_margin_percent'] = round(margin, 2)
            row['is_margin_danger'] = margin < menu.safety_margin_percent
            row['ingredients'] = [link.to_dict() for link in menu.links]
            analysis.append(row)
        return analysis

    def danger_menus(self, scope=None):
        return [row for row in self.menu_cost_analysis(scope) if row['is_margin_danger']]
