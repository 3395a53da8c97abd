"""Feature flag helpers.

Behaviour changes that would alter the feedback students see (for example a
stricter hand classifier) ship behind flags so the default output stays
stable. Flags are read from an environment variable and can be overridden
temporarily in tests via a context manager.

Usage::

    from evtrainer.core import feature_flags

    if feature_flags.is_enabled(feature_flags.FULL_CATEGORIES):
        ...

The environment variable ``EVTRAINER_FEATURES`` accepts a comma-separated
list of flag names.  Flag names are case-insensitive.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Final

_ENV_VAR: Final = "EVTRAINER_FEATURES"

# Detect four of a kind and straight flushes instead of folding them into
# Three of a Kind / Flush.
FULL_CATEGORIES: Final = "evaluator.full_categories"


def _normalise(flag: str) -> str:
    return flag.strip().lower()


def _parse_env(raw: str | None) -> set[str]:
    if not raw:
        return set()
    return {_normalise(entry) for entry in raw.split(",") if entry.strip()}


_OVERRIDE_STACK: list[tuple[set[str], set[str]]] = []


def _current_overrides() -> tuple[set[str], set[str]]:
    enabled: set[str] = set()
    disabled: set[str] = set()
    for en, dis in _OVERRIDE_STACK:
        enabled.update(en)
        disabled.difference_update(en)
        disabled.update(dis)
        enabled.difference_update(dis)
    return enabled, disabled


def is_enabled(flag: str) -> bool:
    """Return True when *flag* is enabled via env var or overrides."""

    key = _normalise(flag)
    enabled, disabled = _current_overrides()
    if key in disabled:
        return False
    if key in enabled:
        return True
    return key in _parse_env(os.getenv(_ENV_VAR))


@contextmanager
def override(*, enable: Iterable[str] | None = None, disable: Iterable[str] | None = None):
    """Temporarily override flag state within the context.

    Overrides are stacked; an inner context wins over an outer one.
    """

    enabled = {_normalise(flag) for flag in (enable or ())}
    disabled = {_normalise(flag) for flag in (disable or ())}
    _OVERRIDE_STACK.append((enabled, disabled))
    try:
        yield
    finally:
        _OVERRIDE_STACK.pop()
