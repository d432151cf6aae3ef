"""Named term-frequency and inverse-document-frequency weighting functions.

The registry maps a family (``tf`` or ``idf``) and a symbolic name to a plain
function. Registration is process-wide: scorers resolve against the module
level ``default_registry`` unless they are handed their own instance.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
import math
import threading
from typing import Literal

from term_stats.errors import UnknownAlgorithmError


logger = logging.getLogger(__name__)

Family = Literal["tf", "idf"]
TfFunction = Callable[[float], float]
IdfFunction = Callable[[float, float], float]

TF: Family = "tf"
IDF: Family = "idf"


def tf_natural(f: float) -> float:
    return f


def tf_logarithm(f: float) -> float:
    return math.log(1 + f)


def tf_sqrt(f: float) -> float:
    return math.sqrt(f)


def idf_logarithm(n: float, df: float) -> float:
    """Return ``ln(n / (1 + df))``; negative once a term is in most documents."""
    return math.log(n / (1 + df))


def idf_none(n: float, df: float) -> float:
    return 1.0


_BUILTIN_TF: Mapping[str, TfFunction] = {
    "natural": tf_natural,
    "logarithm": tf_logarithm,
    "sqrt": tf_sqrt,
}

_BUILTIN_IDF: Mapping[str, IdfFunction] = {
    "logarithm": idf_logarithm,
    "none": idf_none,
}


class AlgorithmRegistry:
    """Typed lookup table of weighting functions per family.

    Usage:
        registry = AlgorithmRegistry.with_builtins()
        registry.register("tf", "binary", lambda f: 1.0 if f > 0 else 0.0)
        tf = registry.resolve("tf", "binary")
    """

    def __init__(self) -> None:
        self._functions: dict[str, dict[str, Callable[..., float]]] = {TF: {}, IDF: {}}
        self._lock = threading.Lock()

    @classmethod
    def with_builtins(cls) -> AlgorithmRegistry:
        """Create a registry pre-populated with the default transforms."""
        registry = cls()
        for name, fn in _BUILTIN_TF.items():
            registry.register(TF, name, fn)
        for name, fn in _BUILTIN_IDF.items():
            registry.register(IDF, name, fn)
        return registry

    def register(self, family: str, name: str, fn: Callable[..., float], *, replace: bool = False) -> None:
        """Register ``fn`` under ``name`` for ``family``.

        Args:
            family: ``"tf"`` or ``"idf"``
            name: Symbolic name callers pass in the scoring options
            fn: Weighting function; TF takes ``f``, IDF takes ``(n, df)``
            replace: Allow overwriting an already registered name

        Raises:
            ValueError: Unknown family, or name taken and ``replace`` is False
        """
        if family not in self._functions:
            raise ValueError(f"Unknown algorithm family '{family}'. Available: {sorted(self._functions)}")
        with self._lock:
            table = self._functions[family]
            if name in table and not replace:
                raise ValueError(f"Algorithm '{name}' is already registered for {family}")
            table[name] = fn
        logger.debug("Registered %s algorithm %s", family, name)

    def resolve(self, family: str, name: str) -> Callable[..., float]:
        """Return the function registered under ``name`` for ``family``.

        Raises:
            UnknownAlgorithmError: The family or the name is not registered
        """
        table = self._functions.get(family)
        if table is None or name not in table:
            raise UnknownAlgorithmError(family, name)
        return table[name]

    def names(self, family: str) -> list[str]:
        """List registered names for a family, sorted."""
        return sorted(self._functions.get(family, {}))

    def __contains__(self, key: tuple[str, str]) -> bool:
        family, name = key
        return name in self._functions.get(family, {})


default_registry = AlgorithmRegistry.with_builtins()


def register(family: str, name: str, fn: Callable[..., float], *, replace: bool = False) -> None:
    """Register a weighting function in the process-wide registry."""
    default_registry.register(family, name, fn, replace=replace)


def resolve(family: str, name: str) -> Callable[..., float]:
    """Resolve a weighting function from the process-wide registry."""
    return default_registry.resolve(family, name)
