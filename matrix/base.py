"""Capability interface for two-dimensional numeric containers."""

from __future__ import annotations

from typing import Any, Dict, Protocol, TypeVar

M = TypeVar("M")


class MatrixTraits(Protocol[M]):
    """Operations the solver needs from a matrix type ``M``.

    Indices are zero based. Implementations are stateless and can be shared.
    """

    def rows(self, m: M) -> int:
        """Return the number of rows of ``m``."""

    def columns(self, m: M) -> int:
        """Return the number of columns of ``m``."""

    def get(self, m: M, row: int, col: int) -> Any:
        """Return the element at ``(row, col)``."""

    def set(self, m: M, row: int, col: int, value: Any) -> None:
        """Store ``value`` at ``(row, col)``."""

    def resize(self, m: M, rows: int, cols: int) -> M:
        """Reallocate ``m`` to ``rows x cols`` with every element set to zero.

        Returns the resized container, which is ``m`` itself when the type
        supports resizing in place.
        """

    def empty(self, like: M) -> M:
        """Return a new 0 x 0 container with the scalar type of ``like``."""

    def epsilon(self, m: M) -> Any:
        """Return the smallest representable difference of ``m``'s scalars."""


_REGISTRY: Dict[type, MatrixTraits[Any]] = {}


def register_traits(matrix_type: type, traits: MatrixTraits[Any]) -> None:
    """Make ``traits`` the capability implementation for ``matrix_type``."""
    _REGISTRY[matrix_type] = traits


def traits_for(m: Any) -> MatrixTraits[Any]:
    """Look up the capability implementation registered for ``type(m)``."""
    for klass in type(m).__mro__:
        traits = _REGISTRY.get(klass)
        if traits is not None:
            return traits
    raise TypeError(f"no matrix traits registered for {type(m).__name__}")
