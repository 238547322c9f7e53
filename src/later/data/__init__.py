"""
Persistence for the to-do document.
"""

from .core import DataCore
from .io import atomic_write, load_model, save_model, DATA_JSON, DATA_YAML

__all__ = [
    'DataCore',
    'atomic_write',
    'load_model',
    'save_model',
    'DATA_JSON',
    'DATA_YAML',
]
