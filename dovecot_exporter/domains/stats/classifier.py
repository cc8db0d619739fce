"""Decide which response format a scope uses."""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from dovecot_exporter.domains.stats.types import ScopeKind

DEFAULT_GLOBAL_SCOPES = frozenset({"global"})


@runtime_checkable
class ScopeClassifier(Protocol):
    """Maps a scope name to the format its export is written in."""

    def classify(self, scope: str) -> ScopeKind:
        """Return the ``ScopeKind`` for ``scope``."""
        ...


class StaticScopeClassifier:
    """Classifier backed by a fixed set of global scope names.

    Every scope not in ``global_scopes`` is treated as a detail scope.
    """

    def __init__(self, global_scopes: Iterable[str] = DEFAULT_GLOBAL_SCOPES) -> None:
        self._global_scopes = frozenset(global_scopes)

    @property
    def global_scopes(self) -> frozenset[str]:
        return self._global_scopes

    def classify(self, scope: str) -> ScopeKind:
        if scope in self._global_scopes:
            return ScopeKind.GLOBAL
        return ScopeKind.DETAIL
