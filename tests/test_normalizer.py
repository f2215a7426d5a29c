import pytest

from services.normalizer import NameNormalizer, normalize_ingredient_name, extract_keywords


class TestNormalize:
    def test_lowercases_and_drops_whitespace_and_punctuation(self):
        assert normalize_ingredient_name(' Onion, Fresh! ') == 'onionfresh'

    @pytest.mark.parametrize('raw, expected', [
        ('양파 2kg', '양파'),
        ('우유 500ml', '우유'),
        ('계란 30개', '계란'),
        ('대파 1.5kg', '대파'),
        ('고등어 2마리', '고등어'),
    ])
    def test_removes_quantity_and_unit_tokens(self, raw, expected):
        assert normalize_ingredient_name(raw) == expected

    def test_strips_trailing_particle(self):
        assert normalize_ingredient_name('양파를') == '양파'
        assert normalize_ingredient_name('감자와') == '감자'

    def test_keeps_two_character_stem(self):
        # '이' is a particle, but stripping it would leave a single character
        assert normalize_ingredient_name('오이') == '오이'

    def test_strips_stacked_particles(self):
        assert normalize_ingredient_name('양파가를') == '양파'

    @pytest.mark.parametrize('value', ['', None])
    def test_empty_input(self, value):
        assert normalize_ingredient_name(value) == ''

    @pytest.mark.parametrize('raw', [
        '양파 2kg', '1k2kgg', '양파가를', '  ', '국내산 양파', '우유500ml을', 'Beef!!', '오이',
    ])
    def test_idempotent(self, raw):
        once = normalize_ingredient_name(raw)
        assert normalize_ingredient_name(once) == once

    def test_unit_removal_can_expose_new_token(self):
        assert normalize_ingredient_name('1k2kgg') == ''


class TestKeywords:
    def test_includes_normalized_name(self):
        assert extract_keywords('양파') == {'양파'}

    def test_adds_prefix_stripped_variant(self):
        assert extract_keywords('유기농 당근') == {'유기농당근', '당근'}

    def test_strips_one_prefix_level(self):
        assert extract_keywords('수입 냉동 새우') == {'수입냉동새우', '냉동새우'}

    def test_empty_name_has_no_keywords(self):
        assert extract_keywords('') == set()


class TestLocales:
    def test_english_locale(self):
        normalizer = NameNormalizer('en')
        assert normalizer.normalize('Frozen Shrimp 2lb') == 'frozenshrimp'
        assert 'shrimp' in normalizer.keywords('Frozen Shrimp')

    def test_custom_locale_dict(self):
        normalizer = NameNormalizer({'unit_tokens': ('kg',), 'particles': (), 'prefixes': ()})
        assert normalizer.normalize('양파를 2kg') == '양파를'
