"""
Domain value types built on the arithmetic core.

Contains the move-only Binding and the rational Polynomial.
"""

from src.core.domain.binding import Binding
from src.core.domain.polynomial import Polynomial

__all__ = [
    "Binding",
    "Polynomial",
]
