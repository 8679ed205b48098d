"""
Core domain models and storage.
"""

from .models import DexPoolRecord, SymbolKey

__all__ = ['DexPoolRecord', 'SymbolKey']
