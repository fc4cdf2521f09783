import pytest

from dealflow.domain.engine import Feature, RecommendationBands, ScoringContext, WeightTable, aggregate
from dealflow.domain.errors import ConfigurationError


def test_weight_table_must_sum_to_one():
    with pytest.raises(ConfigurationError):
        WeightTable({"a": 0.5, "b": 0.4})

    with pytest.raises(ConfigurationError):
        WeightTable({"a": 1.2, "b": -0.2})

    with pytest.raises(ConfigurationError):
        WeightTable({})

    wt = WeightTable({"a": 0.1, "b": 0.2, "c": 0.7})
    assert wt.names() == frozenset({"a", "b", "c"})


def test_weight_table_is_read_only():
    wt = WeightTable({"a": 0.5, "b": 0.5})
    with pytest.raises(TypeError):
        wt.weights["a"] = 1.0  # type: ignore[index]


def test_aggregate_is_weighted_sum():
    scores = {"a": 100.0, "b": 50.0}
    weights = {"a": 0.25, "b": 0.75}
    assert aggregate(scores, weights) == pytest.approx(62.5)


def test_aggregate_rejects_mismatched_keys():
    with pytest.raises(ConfigurationError):
        aggregate({"a": 10.0}, {"a": 0.5, "b": 0.5})
    with pytest.raises(ConfigurationError):
        aggregate({"a": 10.0, "b": 1.0, "c": 1.0}, {"a": 0.5, "b": 0.5})


def test_aggregate_is_deterministic_and_bounded():
    scores = {"a": 33.3, "b": 66.7, "c": 99.9}
    weights = {"a": 0.2, "b": 0.3, "c": 0.5}
    first = aggregate(scores, weights)
    assert all(aggregate(scores, weights) == first for _ in range(20))
    assert 0.0 <= first <= 100.0

    assert aggregate({"a": 100.0, "b": 100.0}, {"a": 0.5, "b": 0.5}) <= 100.0
    assert aggregate({"a": 0.0, "b": 0.0}, {"a": 0.5, "b": 0.5}) == 0.0


def test_context_requires_scorer_for_every_weight():
    weights = WeightTable({"a": 0.5, "b": 0.5})
    with pytest.raises(ConfigurationError):
        ScoringContext("ctx", [Feature("a", lambda c: c, lambda v: 50.0)], weights)

    with pytest.raises(ConfigurationError):
        ScoringContext(
            "ctx",
            [
                Feature("a", lambda c: c, lambda v: 50.0),
                Feature("a", lambda c: c, lambda v: 50.0),
                Feature("b", lambda c: c, lambda v: 50.0),
            ],
            weights,
        )


def test_context_clamps_misbehaving_scorer():
    ctx = ScoringContext(
        "ctx",
        [
            Feature("hot", lambda c: c, lambda v: 250.0),
            Feature("cold", lambda c: c, lambda v: -40.0),
        ],
        WeightTable({"hot": 0.5, "cold": 0.5}),
    )
    b = ctx.score(object())
    assert b.factors == {"hot": 100.0, "cold": 0.0}
    assert b.aggregate == pytest.approx(50.0)
    assert b.weights == {"hot": 0.5, "cold": 0.5}


def test_bands_validation():
    with pytest.raises(ConfigurationError):
        RecommendationBands([])
    with pytest.raises(ConfigurationError):
        RecommendationBands([(10, "x"), (50, "y")])  # gap below 10
    with pytest.raises(ConfigurationError):
        RecommendationBands([(0, "x"), (50, "y"), (50, "z")])  # overlap
    with pytest.raises(ConfigurationError):
        RecommendationBands([(0, "x"), (60, "y"), (40, "z")])  # out of order


def test_bands_cover_every_integer_score():
    bands = RecommendationBands([(0, "low"), (40, "mid"), (70, "high")])
    labels = [bands.label_for(s) for s in range(0, 101)]
    assert set(labels) == {"low", "mid", "high"}
    assert labels[39] == "low" and labels[40] == "mid"
    assert labels[69] == "mid" and labels[70] == "high"
    # out of range clamps to the edge bands
    assert bands.label_for(-5) == "low"
    assert bands.label_for(150) == "high"
    assert bands.label_for(float("nan")) == "low"
