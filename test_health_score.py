"""
Tests for the packaged-food health score rules.
"""

import pytest

from conftest import make_product
from healthapproved.food_scoring.engine import RULES, compute_health_score
from healthapproved.food_scoring.schemas import ScoreStatus
from healthapproved.schemas.additive import AdditiveRecord


def test_soft_drink_scenario(additives):
    product = make_product(category="Soft Drink", nutrition={"sugar": 30, "sodium": 50})
    result = compute_health_score(product, additives)
    assert result.score == 42
    assert result.status == ScoreStatus.NOT_APPROVED
    assert result.reasons == ["Ultra-processed category", "High sugar"]
    assert result.highlights == []


def test_whole_wheat_bonus_is_clamped_to_100(additives):
    product = make_product(ingredients_raw="Whole Wheat Flour, Sugar", nutrition={"sugar": 3})
    result = compute_health_score(product, additives)
    assert result.score == 100
    assert result.status == ScoreStatus.APPROVED
    assert result.reasons == []


def test_sugar_30_costs_exactly_40_points():
    result = compute_health_score(make_product(nutrition={"sugar": 30}), [])
    assert result.score == 60
    assert "High sugar" in result.reasons
    assert result.status == ScoreStatus.CAUTION


@pytest.mark.parametrize(
    "sugar, expected",
    [(5, 100), (5.9, 100), (6, 99), (22.5, 83), (22.6, 68), (60, 60)],
)
def test_sugar_thresholds(sugar, expected):
    assert compute_health_score(make_product(nutrition={"sugar": sugar}), []).score == expected


@pytest.mark.parametrize(
    "sodium, expected",
    [(120, 100), (250, 99), (600, 96), (601, 81), (5000, 65)],
)
def test_sodium_thresholds(sodium, expected):
    assert compute_health_score(make_product(nutrition={"sodium": sodium}), []).score == expected


def test_high_sodium_reason():
    result = compute_health_score(make_product(nutrition={"sodium": 1180}), [])
    assert result.score == 75
    assert result.reasons == ["High sodium"]


def test_trans_fat_forces_not_approved_even_with_high_score():
    # The trans fat rule sets Not Approved directly; the final banding only
    # ever downgrades, so a score of 75 keeps Not Approved here.
    result = compute_health_score(make_product(nutrition={"trans_fat": 0.5}), [])
    assert result.score == 75
    assert result.status == ScoreStatus.NOT_APPROVED
    assert result.reasons == ["Contains trans fat"]


@pytest.mark.parametrize(
    "extra",
    [
        {},
        {"ingredients_raw": "Oats, Almonds, Ragi"},
        {"category": "Cola", "nutrition": {"trans_fat": 0.5, "sugar": 40}},
        {"ingredients_raw": "Citric Acid", "nutrition": {"trans_fat": 0.5, "sodium": 10}},
    ],
)
def test_trans_fat_always_not_approved(additives, extra):
    data = {"nutrition": {"trans_fat": 0.5}}
    data.update(extra)
    result = compute_health_score(make_product(**data), additives)
    assert result.status == ScoreStatus.NOT_APPROVED


def test_zero_trans_fat_is_not_penalized():
    result = compute_health_score(make_product(nutrition={"trans_fat": 0}), [])
    assert result.score == 100
    assert result.status == ScoreStatus.APPROVED


def test_saturated_fat_penalty_has_no_reason():
    assert compute_health_score(make_product(nutrition={"sat_fat": 5}), []).score == 100
    result = compute_health_score(make_product(nutrition={"sat_fat": 5.1}), [])
    assert result.score == 95
    assert result.reasons == []


@pytest.mark.parametrize(
    "category",
    ["Beverages > COLA drinks", "Breakfast Cereal (Sweetened)", "instant noodles", "Processed Meat Products"],
)
def test_ultra_processed_categories(category):
    result = compute_health_score(make_product(category=category), [])
    assert result.score == 82
    assert result.reasons == ["Ultra-processed category"]


def test_missing_category_is_not_penalized():
    assert compute_health_score(make_product(category=None), []).score == 100


def test_red_additive_moves_approved_to_caution(additives):
    product = make_product(ingredients_raw="Sugar, Colour (INS 102)")
    result = compute_health_score(product, additives)
    assert result.score == 88
    assert result.status == ScoreStatus.CAUTION
    assert result.reasons == ["Synthetic azo colour"]
    assert [h.model_dump() for h in result.highlights] == [
        {"name": "Tartrazine", "level": "red", "note": "Synthetic azo colour"}
    ]


def test_red_additive_defaults(additives):
    result = compute_health_score(make_product(ingredients_raw="Pork, Preservative (E250)"), additives)
    assert result.score == 90
    # Any red match leaves at most Caution, even above 80
    assert result.status == ScoreStatus.CAUTION
    assert result.reasons == ["Sodium nitrite"]
    assert result.highlights[0].note == "Avoid frequent use"


def test_red_additive_below_60_is_not_approved(additives):
    product = make_product(ingredients_raw="Sugar, E102", nutrition={"sugar": 30})
    result = compute_health_score(product, additives)
    assert result.score == 48
    assert result.status == ScoreStatus.NOT_APPROVED
    assert result.reasons == ["High sugar", "Synthetic azo colour"]


def test_amber_additives_penalize_without_reasons(additives):
    result = compute_health_score(make_product(ingredients_raw="Salt, MSG, Preservative (INS 211)"), additives)
    assert result.score == 90
    assert result.status == ScoreStatus.APPROVED
    assert result.reasons == []
    assert [(h.name, h.level, h.note) for h in result.highlights] == [
        ("Monosodium glutamate", "amber", "Flavour enhancer"),
        ("Sodium benzoate", "amber", "Limit intake"),
    ]


def test_amber_penalty_is_capped_and_zero_severity_uses_default():
    kb = [
        AdditiveRecord(name="Thickener X", severity=40),  # no level -> amber
        AdditiveRecord(name="Thickener Y", level="amber", severity=0),
    ]
    result = compute_health_score(make_product(ingredients_raw="Thickener X, Thickener Y"), kb)
    assert result.score == 85
    assert [h.level for h in result.highlights] == ["amber", "amber"]


def test_green_and_unknown_levels_only_highlight(additives):
    kb = additives + [AdditiveRecord(name="Pectin", level="blue")]
    result = compute_health_score(make_product(ingredients_raw="Acidity Regulator (INS 330), Pectin"), kb)
    assert result.score == 100
    assert result.status == ScoreStatus.APPROVED
    assert [(h.name, h.level, h.note) for h in result.highlights] == [
        ("Citric acid", "green", "Generally safe"),
        ("Pectin", "green", "Generally safe"),
    ]


def test_highlights_follow_knowledge_base_order(additives):
    result = compute_health_score(make_product(ingredients_raw="INS 330, INS 211, INS 102"), additives)
    assert [h.name for h in result.highlights] == ["Tartrazine", "Sodium benzoate", "Citric acid"]


def test_palm_oil_penalty():
    result = compute_health_score(make_product(ingredients_raw="Potato, Edible Vegetable Oil (Palmolein)"), [])
    assert result.score == 93
    assert result.reasons == ["Refined palm oil/palmolein"]
    assert result.status == ScoreStatus.APPROVED


def test_positive_bonus_applies_once():
    product = make_product(category="Premix", ingredients_raw="Oats, Almonds, Ragi Flour, Moong Dal")
    result = compute_health_score(product, [])
    assert result.score == 88


def test_score_is_clamped_to_zero(additives):
    product = make_product(
        category="Cola",
        nutrition={"sugar": 100, "sodium": 10000, "trans_fat": 2, "sat_fat": 20},
        ingredients_raw="Sugar, Palm Oil, E102, E250",
    )
    result = compute_health_score(product, additives)
    assert result.score == 0
    assert result.status == ScoreStatus.NOT_APPROVED


def test_score_range_and_status_bands(additives):
    samples = [
        make_product(),
        make_product(nutrition={"sugar": 12, "sodium": 400}),
        make_product(category="Energy Drink", nutrition={"sugar": 11}),
        make_product(ingredients_raw="E102, E250, MSG, E211", nutrition={"sat_fat": 9}),
        make_product(ingredients_raw="Peanuts, Jaggery", nutrition={"sugar": 24}),
    ]
    for product in samples:
        result = compute_health_score(product, additives)
        assert 0 <= result.score <= 100
        assert isinstance(result.score, int)
        if result.score < 80:
            assert result.status != ScoreStatus.APPROVED
        if result.score < 60:
            assert result.status == ScoreStatus.NOT_APPROVED


def test_scoring_is_idempotent(additives):
    product = make_product(
        category="Potato Chips",
        nutrition={"sugar": 8, "sodium": 700},
        ingredients_raw="Potato, Palm Oil, MSG, INS 102",
    )
    first = compute_health_score(product, additives)
    second = compute_health_score(product, additives)
    assert first == second
    assert product.ingredients_raw == "Potato, Palm Oil, MSG, INS 102"


def test_rules_end_with_clamp_then_status():
    names = [rule.__name__ for rule in RULES]
    assert names[-2:] == ["clamp_rule", "finalize_status_rule"]


def test_red_additive_landing_exactly_on_60_is_caution(additives):
    # 100 - 18 (category) - 10 (sugar 15) - 12 (Tartrazine) = 60
    product = make_product(category="Soft Drink", nutrition={"sugar": 15}, ingredients_raw="Water, Sugar, Colour (E102)")
    result = compute_health_score(product, additives)
    assert result.score == 60
    assert result.status == ScoreStatus.CAUTION
    assert result.reasons == ["Ultra-processed category", "Synthetic azo colour"]


def test_red_additive_landing_just_below_60_is_not_approved(additives):
    product = make_product(category="Soft Drink", nutrition={"sugar": 16}, ingredients_raw="Water, Sugar, Colour (E102)")
    result = compute_health_score(product, additives)
    assert result.score == 59
    assert result.status == ScoreStatus.NOT_APPROVED


def test_bonus_landing_exactly_on_100():
    # sugar 11 costs 6, the whole wheat bonus gives it back
    result = compute_health_score(make_product(nutrition={"sugar": 11}, ingredients_raw="Whole Wheat Flour"), [])
    assert result.score == 100
    assert result.status == ScoreStatus.APPROVED


@pytest.mark.parametrize(
    "nutrition, expected",
    [({"sugar": float("inf")}, 60), ({"sodium": float("inf")}, 65)],
)
def test_infinite_nutrients_take_the_capped_penalty(nutrition, expected):
    result = compute_health_score(make_product(nutrition=nutrition), [])
    assert result.score == expected


def test_nan_nutrients_are_not_penalized():
    nutrition = {"sugar": float("nan"), "sodium": float("nan"), "trans_fat": float("nan")}
    result = compute_health_score(make_product(nutrition=nutrition), [])
    assert result.score == 100
    assert result.status == ScoreStatus.APPROVED


def test_non_numeric_nutrients_are_unknown():
    product = make_product(nutrition={"sugar": "30", "sodium": True, "trans_fat": "0.5"})
    assert product.nutrition.sugar is None
    assert product.nutrition.sodium is None
    result = compute_health_score(product, [])
    assert result.score == 100
    assert result.reasons == []


def test_fractional_severities_are_floored():
    kb = [
        AdditiveRecord(name="Tartrazine", aliases=["E102"], level="red", severity=12.9),
        AdditiveRecord(name="Carrageenan", aliases=["E407"], level="amber", severity=2.5),
    ]
    result = compute_health_score(make_product(ingredients_raw="Sugar, E102, E407"), kb)
    assert result.score == 86
    assert result.status == ScoreStatus.CAUTION


def test_zero_per_falls_back_to_100():
    assert make_product(per=0).per == 100
    assert make_product(per=None).per == 100
    assert make_product(per=30).per == 30
