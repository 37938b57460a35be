"""
ipinfo.io Lite API
"""

from ..models import LiteDetails
from .base import BaseResolver


class IPInfoLite(BaseResolver):
    """
    Resolver for the free /lite API.

    Returns flat records with country and AS fields only.
    """

    BASE_URL = "https://api.ipinfo.io/lite"
    BASE_URL_V6 = "https://v6.api.ipinfo.io/lite"

    def parse_record(self, data: dict) -> LiteDetails:
        return LiteDetails.from_dict(data)
