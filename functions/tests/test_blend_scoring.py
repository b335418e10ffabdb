"""Scoring engine: priorities, balance adjustments, fallback and degenerate results."""
import dataclasses

import pandas as pd
import pytest

from beefblend.blend_scoring import BlendScoringEngine, default_trim_id, quick_recommend
from beefblend.candidates import Candidate
from beefblend.country import GramsRule
from beefblend.reference_tables import ReferenceTables, TrimSpec

from conftest import FORMED, UNFORMED


def make_candidate(trim_id='80CL Beef Trim', recipe_name='60/40, no water', **overrides):
    values = dict(
        recipe_name=recipe_name,
        trim_id=trim_id,
        beef_fraction=0.6,
        extract_fraction=0.4,
        water_fraction=0.0,
        fiber=4.8,
        protein=12.0,
        energy_kj=727.2,
        calories=175.2,
        saturated_fat=4.88,
        cost=5.4,
        co2=16.8,
        blended_fat=0.124,
    )
    values.update(overrides)
    return Candidate(**values)


@pytest.fixture
def engine(tables, uk):
    return BlendScoringEngine(tables, uk)


class TestPriorities:

    def test_cost_priority_picks_cheapest(self, engine):
        pool, _ = engine.candidate_pool(UNFORMED, 0.20)
        result = engine.recommend(UNFORMED, 0.20, priority='cost')
        winner = next(c for c in pool if (c.recipe_name, c.trim_id) == (result.recipe_name, result.trim_id))
        assert winner.cost == min(c.cost for c in pool)

    def test_cost_priority_ignores_nutrition_and_co2(self, engine):
        cheap = make_candidate(recipe_name='cheap', cost=3.0, fiber=0.0, protein=1.0, co2=30.0)
        rich = make_candidate(recipe_name='rich', cost=6.0, fiber=9.0, protein=20.0, co2=1.0)
        scored = engine.score_candidates([rich, cheap], 'cost')
        assert scored.iloc[0]['recipe_name'] == 'cheap'

    def test_sustainability_prefers_low_co2(self, engine):
        high = make_candidate(recipe_name='high', co2=25.0)
        low = make_candidate(recipe_name='low', co2=10.0)
        scored = engine.score_candidates([high, low], 'sustainability')
        assert scored.iloc[0]['recipe_name'] == 'low'

    @pytest.mark.parametrize("priority", ['cost', 'nutrition', 'balance', 'sustainability'])
    def test_every_priority_recommends(self, engine, priority):
        result = engine.recommend(UNFORMED, 0.20, priority=priority)
        assert result.recipe_name in engine.tables.recipes_for(UNFORMED)
        assert engine.tables.trim_index(result.trim_id) <= 4
        assert not result.is_degenerate


class TestBalanceAdjustments:

    def test_trim_penalty_grows_with_steps_below_ceiling(self, engine):
        """Identical metrics: raw 1.0, minus 5% per step, plus the same bonus."""
        pool = [
            make_candidate(trim_id='70CL Beef Trim'),
            make_candidate(trim_id='75CL Beef Trim'),
            make_candidate(trim_id='80CL Beef Trim'),
        ]
        scored = engine.score_candidates(pool, 'balance', ceiling_index=4).set_index('trim_id')
        assert scored.loc['80CL Beef Trim', 'score'] == pytest.approx(1.12)
        assert scored.loc['75CL Beef Trim', 'score'] == pytest.approx(1.07)
        assert scored.loc['70CL Beef Trim', 'score'] == pytest.approx(1.02)

    def test_no_penalty_without_ceiling(self, engine):
        pool = [make_candidate(trim_id='70CL Beef Trim'), make_candidate(trim_id='80CL Beef Trim')]
        scored = engine.score_candidates(pool, 'balance', ceiling_index=None)
        assert list(scored['score']) == pytest.approx([1.12, 1.12])

    def test_recipe_bonus_peaks_at_forty_percent(self, engine):
        pool = [
            make_candidate(recipe_name='70/30', beef_fraction=0.7, extract_fraction=0.3),
            make_candidate(recipe_name='60/40', beef_fraction=0.6, extract_fraction=0.4),
            make_candidate(recipe_name='60/20/20', beef_fraction=0.6, extract_fraction=0.2, water_fraction=0.2),
        ]
        scored = engine.score_candidates(pool, 'balance', ceiling_index=4).set_index('recipe_name')
        assert scored.loc['60/40', 'score'] == pytest.approx(1.12)
        assert scored.loc['60/20/20', 'score'] == pytest.approx(1.12)
        assert scored.loc['70/30', 'score'] < scored.loc['60/40', 'score']

    def test_adjustments_only_apply_to_balance(self, engine):
        pool = [make_candidate(trim_id='70CL Beef Trim'), make_candidate(trim_id='80CL Beef Trim')]
        scored = engine.score_candidates(pool, 'nutrition', ceiling_index=4)
        assert list(scored['score']) == pytest.approx([1.25, 1.25])

    def test_unknown_priority_uses_balance_weights_only(self, engine):
        pool = [make_candidate(trim_id='70CL Beef Trim')]
        scored = engine.score_candidates(pool, 'speed', ceiling_index=4)
        assert scored.iloc[0]['score'] == pytest.approx(1.0)

    def test_penalty_override(self, tables, uk):
        engine = BlendScoringEngine(tables, uk, overrides={'trim_penalty': 0.1, 'balance_recipe_bonus': 0})
        scored = engine.score_candidates([make_candidate(trim_id='75CL Beef Trim')], 'balance', ceiling_index=4)
        assert scored.iloc[0]['score'] == pytest.approx(0.9)


class TestRanking:

    def test_scored_frame_is_sorted_and_ranked(self, engine):
        scored = engine.ranking(UNFORMED, 0.20, 'balance')
        assert list(scored['rank']) == list(range(1, len(scored) + 1))
        assert scored['score'].is_monotonic_decreasing
        for column in ['n_fiber', 'n_protein', 'n_calories', 'n_satfat', 'n_cost', 'n_co2', 'nutrition']:
            assert scored[column].between(0, 1).all()

    def test_ties_keep_enumeration_order(self, engine):
        pool = [make_candidate(recipe_name=name) for name in ['first', 'second', 'third']]
        scored = engine.score_candidates(pool, 'cost')
        assert list(scored['recipe_name']) == ['first', 'second', 'third']

    def test_winner_is_top_of_ranking(self, engine):
        scored = engine.ranking(UNFORMED, 0.20, 'nutrition')
        result = engine.recommend(UNFORMED, 0.20, 'nutrition')
        assert (result.recipe_name, result.trim_id) == (scored.iloc[0]['recipe_name'], scored.iloc[0]['trim_id'])
        assert result.score == pytest.approx(scored.iloc[0]['score'])

    def test_empty_pool(self, engine):
        scored = engine.score_candidates([], 'balance')
        assert scored.empty
        assert 'score' in scored.columns

    def test_idempotent(self, engine):
        first = engine.recommend(UNFORMED, 0.20, 'balance', must_fiber=True)
        second = engine.recommend(UNFORMED, 0.20, 'balance', must_fiber=True)
        assert first == second
        pd.testing.assert_frame_equal(
            engine.ranking(UNFORMED, 0.20, 'balance'),
            engine.ranking(UNFORMED, 0.20, 'balance'),
        )


class TestFallback:

    def test_fiber_constraint_fallback(self, engine):
        """No formed blend reaches 6g fibre, so the pool is rebuilt without it."""
        pool, used_fallback = engine.candidate_pool(FORMED, 0.20, must_fiber=True)
        assert used_fallback is True
        assert len(pool) == 5

        result = engine.recommend(FORMED, 0.20, must_fiber=True)
        assert result.used_fallback is True
        assert not result.is_degenerate

    def test_satisfiable_constraint_does_not_fall_back(self, engine):
        result = engine.recommend(UNFORMED, 0.20, must_fiber=True)
        assert result.used_fallback is False
        assert result.recipe_name == '50/50, no water'

    def test_no_fallback_flag_without_constraints(self, engine):
        _, used_fallback = engine.candidate_pool(FORMED, 0.20)
        assert used_fallback is False

    def test_protein_constraint_fallback(self, tables, us):
        """No blend reaches 50g protein, so the protein-only request falls back."""
        strict = dataclasses.replace(us, high_protein=GramsRule(50))
        engine = BlendScoringEngine(tables, strict)

        pool, used_fallback = engine.candidate_pool(UNFORMED, 0.20, must_protein=True)
        assert used_fallback is True
        assert len(pool) == 16

        result = engine.recommend(UNFORMED, 0.20, must_protein=True)
        assert result.used_fallback is True
        assert not result.is_degenerate

    def test_satisfiable_protein_constraint(self, tables, us):
        result = BlendScoringEngine(tables, us).recommend(UNFORMED, 0.20, must_protein=True)
        assert result.used_fallback is False


class TestDegenerate:

    def test_unknown_format(self, engine):
        result = engine.recommend('Sausage', 0.20)
        assert result.is_degenerate
        assert result.recipe_name is None
        assert result.trim_id == '80CL Beef Trim'

    def test_missing_trims_return_first_recipe(self, tables, uk):
        empty_trims = ReferenceTables(recipes=tables.recipes, extract_nutrients=tables.extract_nutrients)
        result = BlendScoringEngine(empty_trims, uk).recommend(UNFORMED, 0.20)
        assert result.is_degenerate
        assert result.recipe_name == '50/50, no water'
        assert result.trim_id == '80CL Beef Trim'
        assert result.used_fallback is False

    def test_short_trim_order_uses_last_trim(self, uk):
        tables = ReferenceTables(trims={'A': TrimSpec(0.2, 1.0)}, recipes={}, trim_order=('A',))
        result = BlendScoringEngine(tables, uk).recommend(UNFORMED, 0.20)
        assert result.is_degenerate
        assert result.recipe_name is None
        assert result.trim_id == 'A'

    def test_default_trim_id(self):
        assert default_trim_id(('a', 'b', 'c', 'd', 'e', 'f')) == 'e'
        assert default_trim_id(('a', 'b')) == 'b'
        assert default_trim_id(()) is None

    def test_unmatched_ceiling_still_recommends(self, engine, caplog):
        result = engine.recommend(UNFORMED, 0.22)
        assert not result.is_degenerate
        assert 'No trim matches fat ceiling' in caplog.text

class TestInvalidScores:
    """Overrides that pass parsing but produce NaN scores still rank and recommend."""

    def test_all_nan_scores_keep_enumeration_order(self, tables, uk):
        # Flat pool: every component is 1.0, so the composite is sqrt(0.35 + 0.35 - 1 + 0.1)
        engine = BlendScoringEngine(tables, uk, overrides={'nutr_w_calories': -1.0})
        pool = [make_candidate(recipe_name=name) for name in ['first', 'second', 'third']]
        scored = engine.score_candidates(pool, 'cost')
        assert scored['score'].isna().all()
        assert list(scored['recipe_name']) == ['first', 'second', 'third']
        assert list(scored['rank']) == [1, 2, 3]

    def test_nan_score_ranks_last(self, tables, uk, caplog):
        engine = BlendScoringEngine(tables, uk, overrides={'nutr_w_calories': -1.0})
        lean = make_candidate(recipe_name='lean', calories=150.0)
        rich = make_candidate(recipe_name='rich', calories=250.0)
        scored = engine.score_candidates([lean, rich], 'nutrition')
        assert list(scored['recipe_name']) == ['rich', 'lean']
        assert pd.isna(scored.iloc[1]['score'])
        assert 'scored NaN' in caplog.text

    def test_recommend_with_negative_weight(self, tables, uk):
        engine = BlendScoringEngine(tables, uk, overrides={'nutr_w_calories': -1.0})
        scored = engine.ranking(UNFORMED, 0.20, 'cost')
        assert sorted(scored['rank']) == list(range(1, len(scored) + 1))

        result = engine.recommend(UNFORMED, 0.20, 'cost')
        assert not result.is_degenerate
        assert (result.recipe_name, result.trim_id) == (scored.iloc[0]['recipe_name'], scored.iloc[0]['trim_id'])

    def test_negative_pad(self, tables, uk):
        engine = BlendScoringEngine(tables, uk, overrides={'cost_pad': -0.5, 'co2_pad': -0.5})
        result = engine.recommend(UNFORMED, 0.20, 'sustainability')
        assert result.recipe_name in tables.recipes_for(UNFORMED)


def test_quick_recommend_matches_engine(tables, uk):
    engine = BlendScoringEngine(tables, uk)
    assert quick_recommend(tables, uk, UNFORMED, 0.20, 'cost') == engine.recommend(UNFORMED, 0.20, 'cost')
