"""
View Package
Template rendering used by ResponseAdapter.view() and the error page
"""
from sanicmvc.view.engine import ViewEngine

__all__ = [
    'ViewEngine',
]
