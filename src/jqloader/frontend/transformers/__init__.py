"""
Module header transformers
"""

from .base import ModuleTransformer

__all__ = ['ModuleTransformer']
