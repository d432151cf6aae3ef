"""Unit tests for the weighting-function registry."""

from __future__ import annotations

import math

import pytest

from term_stats import algorithms
from term_stats.algorithms import AlgorithmRegistry
from term_stats.errors import ConfigurationError, UnknownAlgorithmError


pytestmark = pytest.mark.unit


def test_builtin_names(registry: AlgorithmRegistry) -> None:
    assert registry.names("tf") == ["logarithm", "natural", "sqrt"]
    assert registry.names("idf") == ["logarithm", "none"]


@pytest.mark.parametrize(
    ("name", "f", "expected"),
    [
        ("natural", 4.0, 4.0),
        ("logarithm", 4.0, math.log(5.0)),
        ("sqrt", 4.0, 2.0),
    ],
)
def test_tf_builtins(registry: AlgorithmRegistry, name: str, f: float, expected: float) -> None:
    assert registry.resolve("tf", name)(f) == pytest.approx(expected)


def test_idf_builtins(registry: AlgorithmRegistry) -> None:
    assert registry.resolve("idf", "logarithm")(3.0, 1.0) == pytest.approx(math.log(1.5))
    assert registry.resolve("idf", "none")(3.0, 1.0) == 1.0


def test_logarithmic_idf_goes_negative_for_frequent_terms(registry: AlgorithmRegistry) -> None:
    assert registry.resolve("idf", "logarithm")(4.0, 4.0) < 0


def test_resolve_unknown_name_carries_family_and_name(registry: AlgorithmRegistry) -> None:
    with pytest.raises(UnknownAlgorithmError) as exc_info:
        registry.resolve("idf", "bm25")

    error = exc_info.value
    assert isinstance(error, ConfigurationError)
    assert (error.family, error.name) == ("idf", "bm25")
    assert "bm25" in str(error)


def test_resolve_unknown_family(registry: AlgorithmRegistry) -> None:
    with pytest.raises(UnknownAlgorithmError) as exc_info:
        registry.resolve("normalization", "natural")
    assert exc_info.value.family == "normalization"


def test_names_are_per_family(registry: AlgorithmRegistry) -> None:
    assert ("tf", "sqrt") in registry
    assert ("idf", "sqrt") not in registry


def test_register_requires_replace_to_overwrite(registry: AlgorithmRegistry) -> None:
    with pytest.raises(ValueError, match="already registered"):
        registry.register("tf", "natural", lambda f: f * 2)

    registry.register("tf", "natural", lambda f: f * 2, replace=True)
    assert registry.resolve("tf", "natural")(3.0) == 6.0


def test_register_rejects_unknown_family(registry: AlgorithmRegistry) -> None:
    with pytest.raises(ValueError, match="Unknown algorithm family"):
        registry.register("boost", "double", lambda f: f * 2)


def test_process_wide_registration() -> None:
    algorithms.register("idf", "smooth_test", lambda n, df: math.log(1 + n / (1 + df)), replace=True)
    assert algorithms.resolve("idf", "smooth_test")(3.0, 2.0) == pytest.approx(math.log(2.0))
    assert "smooth_test" in algorithms.default_registry.names("idf")


def test_fresh_registry_is_empty() -> None:
    registry = AlgorithmRegistry()
    assert registry.names("tf") == []
    with pytest.raises(UnknownAlgorithmError):
        registry.resolve("tf", "natural")
