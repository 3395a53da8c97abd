from __future__ import annotations

from evtrainer.core import feature_flags


def test_env_and_override_stack(monkeypatch) -> None:
    monkeypatch.delenv("EVTRAINER_FEATURES", raising=False)
    assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is False

    monkeypatch.setenv("EVTRAINER_FEATURES", " Evaluator.Full_Categories ")
    assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is True

    with feature_flags.override(disable={feature_flags.FULL_CATEGORIES}):
        assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is False
        with feature_flags.override(enable={"evaluator.other"}):
            assert feature_flags.is_enabled("evaluator.other") is True
            assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is False
        with feature_flags.override(enable={feature_flags.FULL_CATEGORIES}):
            assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is True

    assert feature_flags.is_enabled(feature_flags.FULL_CATEGORIES) is True


def test_env_list_is_comma_separated_and_case_insensitive(monkeypatch) -> None:
    monkeypatch.setenv("EVTRAINER_FEATURES", "foo, EVALUATOR.FULL_CATEGORIES ,")
    assert feature_flags.is_enabled("evaluator.full_categories")
    assert feature_flags.is_enabled("FOO")
    assert not feature_flags.is_enabled("bar")
