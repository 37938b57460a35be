"""
Resolvers for the ipinfo.io API products
"""

from .base import BaseResolver
from .standard import IPInfo
from .lite import IPInfoLite
from .core import IPInfoCore

__all__ = ['BaseResolver', 'IPInfo', 'IPInfoLite', 'IPInfoCore']
