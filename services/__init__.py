"""
Services Package

The margin engine: name normalization, ingredient matching, cost
propagation, portfolio classification and price simulation.
"""

from .errors import (
    EngineError,
    ValidationError,
    NotFoundError,
    RepositoryError,
)

from .normalizer import (
    NameNormalizer,
    normalize_ingredient_name,
    extract_keywords,
)

from .matching import (
    IngredientMatcher,
    MatchResult,
    similarity_score,
    find_best_matches,
    infer_category,
    infer_unit,
)

from .cost import (
    calculate_price_per_unit,
    calculate_menu_cost,
    calculate_margin_percent,
)

from .observations import (
    ParsedIngredientObservation,
    validate_observation,
    parse_extraction_text,
)

from .repository import CatalogRepository

from .propagation import (
    CostPropagationEngine,
    AffectedMenu,
    PriceUpdate,
    BatchResult,
)

from .portfolio import (
    classify,
    summarize,
    menu_stats_from_sales,
)

from .simulator import (
    simulate,
    simulate_range,
    SimulationResult,
)

__all__ = [
    # Errors
    'EngineError',
    'ValidationError',
    'NotFoundError',
    'RepositoryError',
    # Normalization
    'NameNormalizer',
    'normalize_ingredient_name',
    'extract_keywords',
    # Matching
    'IngredientMatcher',
    'MatchResult',
    'similarity_score',
    'find_best_matches',
    'infer_category',
    'infer_unit',
    # Cost
    'calculate_price_per_unit',
    'calculate_menu_cost',
    'calculate_margin_percent',
    # Observations
    'ParsedIngredientObservation',
    'validate_observation',
    'parse_extraction_text',
    # Propagation
    'CatalogRepository',
    'CostPropagationEngine',
    'AffectedMenu',
    'PriceUpdate',
    'BatchResult',
    # Portfolio
    'classify',
    'summarize',
    'menu_stats_from_sales',
    # Simulation
    'simulate',
    'simulate_range',
    'SimulationResult',
]
