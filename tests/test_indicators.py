import pytest

from hamcall.adapters.entities import EntityTable
from hamcall.adapters.indicators import KNOWN_INDICATORS, IndicatorClassifier
from hamcall.models import PrefixState


@pytest.fixture
def classifier(entities) -> IndicatorClassifier:
    return IndicatorClassifier(entities)


@pytest.fixture
def n0() -> PrefixState:
    return PrefixState(ituPrefix="N", digit="0", prefix="N0", extendedPrefix="N01")


def test_digits_replace_zone(classifier, n0) -> None:
    state = classifier.classify("7", n0)
    assert (state.ituPrefix, state.digit, state.prefix) == ("N", "7", "N7")
    assert state.extendedPrefix is None


def test_digits_without_prefix_are_inert(classifier) -> None:
    state = PrefixState()
    assert classifier.classify("7", state) == state


def test_input_state_is_not_mutated(classifier, n0) -> None:
    before = n0.model_copy(deep=True)
    classifier.classify("7", n0)
    classifier.classify("P", n0)
    classifier.classify("KH6", n0)
    assert n0 == before


@pytest.mark.parametrize("token", sorted(KNOWN_INDICATORS))
def test_known_indicators(classifier, n0, token) -> None:
    state = classifier.classify(token, n0)
    assert state.indicators == [token]
    assert state.prefix == "N0"
    assert state.prefixOverride is None


def test_indicators_accumulate_in_order(classifier, n0) -> None:
    state = classifier.classify("P", classifier.classify("QRP", n0))
    assert state.indicators == ["QRP", "P"]


def test_license_class_indicator_wins_over_country_shape(classifier, n0) -> None:
    # AG also has the shape of a US area prefix
    state = classifier.classify("AG", n0)
    assert state.indicators == ["AG"]
    assert state.prefix == "N0"


def test_suffixed_country_overrides(classifier, n0) -> None:
    state = classifier.classify("KH6", n0)
    assert (state.ituPrefix, state.digit, state.prefix) == ("KH", "6", "KH6")
    assert state.prefixOverride == "KH6"
    assert state.extendedPrefix is None


def test_suffixed_country_does_not_need_the_table(n0) -> None:
    state = IndicatorClassifier(EntityTable()).classify("VE5", n0)
    assert state.prefix == "VE5"


def test_entity_fallback(classifier, n0) -> None:
    assert classifier.classify("HK0", n0).prefix == "HK0"
    assert classifier.classify("YV7", n0).prefix == "YV7"
    assert classifier.classify("YV7", n0).prefixOverride == "YV7"


@pytest.mark.parametrize("token", ["NA3", "XX", "A", "10N"])
def test_unrecognized_tokens_are_inert(classifier, n0, token) -> None:
    assert classifier.classify(token, n0) == n0
