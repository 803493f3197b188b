"""
Primitive interfaces for the binomial generator.

This module defines protocol interfaces for:
- UniformSource: seedable 32-bit pseudorandom generator

The concrete implementation is in bernie/taus88.py.
"""

from .uniform import UniformSource

__all__ = [
    "UniformSource",
]
