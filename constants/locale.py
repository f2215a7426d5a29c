"""
Locale Rules

String tables used by the name normalizer. Each locale is a plain dict so a
different language can be plugged into NameNormalizer without code changes.
"""

# Unit tokens recognised after a number ("2kg", "500ml", "3개")
KOREAN_UNIT_TOKENS = (
    'kg', 'g', 'ml', 'l', '개', '박스', '봉', '팩', '묶음', '근', '마리',
)

# Trailing grammatical particles (longest first so '으로' wins over '로')
KOREAN_PARTICLES = ('으로', '을', '를', '이', '가', '의', '에', '로', '와', '과')

# Origin/freshness prefixes stripped when building keyword variants
KOREAN_PREFIXES = ('국내산', '수입', '냉동', '신선', '유기농', '무농약')

KOREAN = {
    'unit_tokens': KOREAN_UNIT_TOKENS,
    'particles': KOREAN_PARTICLES,
    'prefixes': KOREAN_PREFIXES,
    # A particle is only stripped when at least this many characters remain
    'min_stem_length': 2,
}

ENGLISH = {
    'unit_tokens': ('kg', 'g', 'ml', 'l', 'lb', 'lbs', 'oz', 'ea', 'pcs', 'pack', 'box'),
    'particles': (),
    'prefixes': ('imported', 'domestic', 'frozen', 'fresh', 'organic', 'local'),
    'min_stem_length': 2,
}

LOCALES = {
    'ko': KOREAN,
    'en': ENGLISH,
}

DEFAULT_LOCALE = 'ko'
