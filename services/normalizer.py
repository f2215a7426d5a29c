"""
Name Normalization Service

Canonicalizes free-text ingredient names so that receipt lines, form input
and catalog entries can be compared.
"""

import re

from constants import LOCALES, DEFAULT_LOCALE

_NON_WORD = re.compile(r'[\W_]+')


class NameNormalizer:
    """
    Locale-aware ingredient name normalizer.

    normalize() lower-cases, drops whitespace and punctuation, removes
    quantity+unit tokens ("2kg", "500ml"), then strips trailing particles.
    The steps are repeated until the string stops changing, so the result
    is always a fixed point: normalize(normalize(x)) == normalize(x).
    """

    def __init__(self, locale=None):
        if locale is None or isinstance(locale, str):
            locale = LOCALES[locale or DEFAULT_LOCALE]
        self.particles = sorted(locale.get('particles', ()), key=len, reverse=True)
        self.prefixes = tuple(locale.get('prefixes', ()))
        self.min_stem_length = locale.get('min_stem_length', 2)

        units = sorted(locale.get('unit_tokens', ()), key=len, reverse=True)
        self.unit_tokens = tuple(units)
        if units:
            alternatives = '|'.join(re.escape(u) for u in units)
            self._quantity_unit = re.compile(r'\d+(?:\.\d+)?(?:' + alternatives + ')')
        else:
            self._quantity_unit = None

    def _strip_particle(self, text):
        for particle in self.particles:
            if text.endswith(particle) and len(text) - len(particle) >= self.min_stem_length:
                return text[:-len(particle)]
        return text

    def _step(self, text):
        text = text.lower()
        text = _NON_WORD.sub('', text)
        if self._quantity_unit is not None:
            text = self._quantity_unit.sub('', text)
        text = self._strip_particle(text)
        return text.strip()

    def normalize(self, name):
        if not name:
            return ''
        text = str(name)
        while True:
            stepped = self._step(text)
            if stepped == text:
                return stepped
            text = stepped

    def keywords(self, name):
        """Normalized name plus variants with origin/freshness prefixes removed."""
        normalized = self.normalize(name)
        keywords = {normalized}
        for prefix in self.prefixes:
            if normalized.startswith(prefix):
                keywords.add(normalized[len(prefix):])
        keywords.discard('')
        return keywords


_default = NameNormalizer()


def normalize_ingredient_name(name):
    """Normalize an ingredient name with the default locale."""
    return _default.normalize(name)


def extract_keywords(name):
    """Keyword variants of an ingredient name with the default locale."""
    return _default.keywords(name)
