"""
Framework Support Classes
"""

from sanicmvc.support.env_helper import EnvHelper
from sanicmvc.support.config import EngineOptions

__all__ = [
    'EnvHelper',
    'EngineOptions',
]
