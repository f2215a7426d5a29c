"""
Ingredient Matching Service

Resolves a noisy observed ingredient name against the catalog and infers
category/unit for ingredients that have to be created from scratch.
"""

import logging
import math
import re
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from constants import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, UNIT_DEFAULT_KEYWORDS, DEFAULT_UNIT
from .normalizer import NameNormalizer

logger = logging.getLogger(__name__)

EXACT_SCORE = 100
TAG_SCORE = 95
DEFAULT_THRESHOLD = 60


@dataclass
class MatchResult:
    ingredient_id: object
    name: str
    score: int
    match_type: str  # 'exact', 'tag' or 'fuzzy'

    def to_dict(self):
        return {
            'ingredient_id': self.ingredient_id,
            'name': self.name,
            'score': self.score,
            'match_type': self.match_type,
        }


def _strip_hash(tag):
    return (tag or '').lstrip('#')


class IngredientMatcher:
    """
    Scores catalog candidates against a search name.

    Priority per candidate, first hit wins:
    1. exact  - normalized names are equal (score 100)
    2. tag    - a normalized tag equals the search, or a keyword of one side
                contains a keyword of the other (score 95)
    3. fuzzy  - normalized Levenshtein similarity of name or best tag,
                kept only when it reaches the threshold
    """

    def __init__(self, normalizer=None, category_keywords=CATEGORY_KEYWORDS,
                 unit_keywords=UNIT_DEFAULT_KEYWORDS, default_category=DEFAULT_CATEGORY,
                 default_unit=DEFAULT_UNIT):
        self.normalizer = normalizer or NameNormalizer()
        self.category_keywords = category_keywords
        self.unit_keywords = unit_keywords
        self.default_category = default_category
        self.default_unit = default_unit

        tokens = '|'.join(re.escape(u) for u in self.normalizer.unit_tokens)
        self._explicit_unit = re.compile(r'(\d+\.?\d*)\s*(' + tokens + ')', re.IGNORECASE) if tokens else None

    def similarity_score(self, str1, str2):
        """Similarity in [0, 100] from the edit distance of the normalized strings."""
        s1 = self.normalizer.normalize(str1)
        s2 = self.normalizer.normalize(str2)

        if s1 == s2:
            return 100
        if not s1 or not s2:
            return 0

        distance = Levenshtein.distance(s1, s2)
        ratio = 1 - distance / max(len(s1), len(s2))
        # Round half up
        return int(math.floor(ratio * 100 + 0.5))

    def _tag_matches(self, tags, normalized_search, search_keywords):
        for tag in tags:
            normalized_tag = self.normalizer.normalize(_strip_hash(tag))
            if not normalized_tag:
                continue
            if normalized_tag == normalized_search:
                return True
            tag_keywords = self.normalizer.keywords(_strip_hash(tag))
            for kw in search_keywords:
                for tag_kw in tag_keywords:
                    if tag_kw in kw or kw in tag_kw:
                        return True
        return False

    def find_best_matches(self, search_name, catalog, threshold=DEFAULT_THRESHOLD):
        """
        Rank catalog entries ({'id', 'name', 'tags'}) for search_name.

        Returns a list of MatchResult, best score first. Equal scores keep
        catalog order. An empty normalized search matches nothing.
        """
        normalized_search = self.normalizer.normalize(search_name)
        if not normalized_search:
            return []
        search_keywords = self.normalizer.keywords(search_name)

        results = []
        for candidate in catalog:
            name = candidate['name']
            tags = candidate.get('tags') or []

            if self.normalizer.normalize(name) == normalized_search:
                results.append(MatchResult(candidate['id'], name, EXACT_SCORE, 'exact'))
                continue

            if self._tag_matches(tags, normalized_search, search_keywords):
                results.append(MatchResult(candidate['id'], name, TAG_SCORE, 'tag'))
                continue

            name_score = self.similarity_score(search_name, name)
            tag_scores = [self.similarity_score(search_name, _strip_hash(t)) for t in tags]
            best_score = max([name_score] + tag_scores)

            if best_score >= threshold:
                results.append(MatchResult(candidate['id'], name, best_score, 'fuzzy'))

        # list.sort is stable, so ties stay in catalog order
        results.sort(key=lambda r: r.score, reverse=True)
        if results:
            logger.debug("Matched %r -> %r (%s, %d)", search_name, results[0].name,
                         results[0].match_type, results[0].score)
        return results

    def best_match(self, search_name, catalog, threshold=DEFAULT_THRESHOLD):
        """Top match or None when nothing clears the threshold."""
        matches = self.find_best_matches(search_name, catalog, threshold)
        return matches[0] if matches else None

    def infer_category(self, name):
        """Coarse category from keyword lookup, 'other' when nothing matches."""
        name_lower = (name or '').lower()
        for category, keywords in self.category_keywords:
            if any(keyword in name_lower for keyword in keywords):
                return category
        return self.default_category

    def infer_unit(self, name):
        """Unit embedded in the name ("양파 5kg"), else a category default."""
        name = name or ''
        if self._explicit_unit is not None:
            match = self._explicit_unit.search(name)
            if match:
                return match.group(2).lower()

        name_lower = name.lower()
        for unit, keywords in self.unit_keywords:
            if any(keyword in name_lower for keyword in keywords):
                return unit
        return self.default_unit


_default = IngredientMatcher()


def similarity_score(str1, str2):
    return _default.similarity_score(str1, str2)


def find_best_matches(search_name, catalog, threshold=DEFAULT_THRESHOLD):
    return _default.find_best_matches(search_name, catalog, threshold)


def infer_category(name):
    return _default.infer_category(name)


def infer_unit(name):
    return _default.infer_unit(name)
