"""
Output modules for IPLens
"""

from .console import ConsoleOutput, summarize
from .json_export import JsonExporter

__all__ = ['ConsoleOutput', 'summarize', 'JsonExporter']
