"""
Enrichment modules for IPLens
"""

from .ip_classifier import BogonClassifier, is_bogon, is_bogon_addr
from .country_data import EnrichmentTables, flag_for, flag_url_for

__all__ = [
    'BogonClassifier', 'is_bogon', 'is_bogon_addr',
    'EnrichmentTables', 'flag_for', 'flag_url_for',
]
