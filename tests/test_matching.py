import pytest

from services.matching import (
    IngredientMatcher,
    find_best_matches,
    infer_category,
    infer_unit,
    similarity_score,
)


def entry(id, name, tags=None):
    return {'id': id, 'name': name, 'tags': tags or []}


class TestSimilarityScore:
    def test_identical(self):
        assert similarity_score('양파', '양파') == 100

    def test_identical_after_normalization(self):
        assert similarity_score('양파 2kg', '양파를') == 100

    def test_both_empty(self):
        assert similarity_score('', '') == 100

    def test_one_empty(self):
        assert similarity_score('abc', '') == 0

    def test_nothing_in_common(self):
        assert similarity_score('abc', 'xyz') == 0

    def test_rounds_half_up(self):
        # one edit over three characters: 66.67 -> 67
        assert similarity_score('양파즙', '양파') == 67
        # one edit over two characters: 50.0
        assert similarity_score('ab', 'ac') == 50


class TestFindBestMatches:
    def test_exact_outranks_fuzzy(self):
        catalog = [entry(2, '양파즙'), entry(1, '양파')]
        results = find_best_matches('양파', catalog)
        assert results[0].ingredient_id == 1
        assert results[0].match_type == 'exact'
        assert results[0].score == 100
        assert results[1].ingredient_id == 2
        assert results[1].match_type == 'fuzzy'

    def test_exact_after_normalization(self):
        results = find_best_matches(' 양파 2kg ', [entry(1, '양파')])
        assert results[0].match_type == 'exact'

    def test_tag_equal_to_search(self):
        results = find_best_matches('green onion', [entry(1, '대파', ['#대파', 'green onion'])])
        assert results[0].match_type == 'tag'
        assert results[0].score == 95

    def test_tag_keyword_containment(self):
        results = find_best_matches('국내산 양파', [entry(1, '양파', ['#양파'])])
        assert results[0].match_type == 'tag'

    def test_below_threshold_is_dropped(self):
        assert find_best_matches('감자', [entry(1, '고구마')]) == []

    def test_custom_threshold(self):
        assert find_best_matches('ab', [entry(1, 'ac')], threshold=60) == []
        assert len(find_best_matches('ab', [entry(1, 'ac')], threshold=50)) == 1

    def test_empty_search_matches_nothing(self):
        assert find_best_matches('  ', [entry(1, '양파')]) == []

    def test_ties_keep_catalog_order(self):
        catalog = [entry(1, '양파'), entry(2, '양파')]
        assert [r.ingredient_id for r in find_best_matches('양파즙', catalog)] == [1, 2]
        assert [r.ingredient_id for r in find_best_matches('양파즙', catalog[::-1])] == [2, 1]

    def test_empty_tags_are_ignored(self):
        results = find_best_matches('양파', [entry(1, '감자', ['', '#'])])
        assert results == []

    def test_best_match(self):
        matcher = IngredientMatcher()
        assert matcher.best_match('양파', [entry(1, '양파')]).ingredient_id == 1
        assert matcher.best_match('양파', []) is None


class TestInference:
    @pytest.mark.parametrize('name, category', [
        ('돼지 목살', 'meat'),
        ('양파', 'produce'),
        ('참외', 'fruit'),
        ('간장', 'seasoning'),
        ('우유', 'dairy'),
        ('밀가루', 'grain'),
        ('Chicken breast', 'meat'),
        ('종이컵', 'other'),
    ])
    def test_infer_category(self, name, category):
        assert infer_category(name) == category

    @pytest.mark.parametrize('name, unit', [
        ('양파 5kg', 'kg'),
        ('계란 30개', '개'),
        ('생수 2L', 'l'),
        ('계란', '개'),
        ('우유', 'ml'),
        ('삼겹살', 'kg'),
        ('종이컵', 'kg'),
    ])
    def test_infer_unit(self, name, unit):
        assert infer_unit(name) == unit

    def test_infer_with_empty_name(self):
        assert infer_category('') == 'other'
        assert infer_unit(None) == 'kg'
