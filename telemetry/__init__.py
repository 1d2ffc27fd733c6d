"""Result output helpers."""

from .writer import write_result

__all__ = ["write_result"]
