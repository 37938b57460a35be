"""
ipinfo.io Core API
"""

from ..models import CoreDetails
from .base import BaseResolver


class IPInfoCore(BaseResolver):
    """Resolver for the /lookup API, which nests geo and AS details"""

    BASE_URL = "https://api.ipinfo.io/lookup"
    BASE_URL_V6 = "https://v6.api.ipinfo.io/lookup"

    def parse_record(self, data: dict) -> CoreDetails:
        return CoreDetails.from_dict(data)
