"""Matrix containers and the capability interface the solver works against."""

from .base import MatrixTraits, register_traits, traits_for
from .dense import DenseMatrix, DenseTraits
from .numpy_backend import NumpyTraits

__all__ = [
    "DenseMatrix",
    "DenseTraits",
    "MatrixTraits",
    "NumpyTraits",
    "register_traits",
    "traits_for",
]
