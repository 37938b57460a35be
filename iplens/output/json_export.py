"""
JSON export for IPLens
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from .. import __version__


class JsonExporter:
    """
    Export lookup results to JSON format.

    Records are written with the service's own field names, enrichment
    fields included, under a small meta block.
    """

    def __init__(self, source: str = "ipinfo.io"):
        self.source = source

    def export(self, results: dict, output_path: Optional[Path] = None) -> dict:
        """
        Export lookup results to JSON.

        Args:
            results: Mapping of address -> record
            output_path: Optional file path to write

        Returns:
            JSON-serializable dict
        """
        data = {
            "meta": {
                "version": __version__,
                "generator": "IPLens",
                "data_source": self.source,
                "generated_at": datetime.now().isoformat()
            },
            "results": {ip: record.to_dict() for ip, record in results.items()}
        }

        if output_path:
            self._write_file(data, output_path)

        return data

    def _write_file(self, data: dict, path: Path):
        """Write JSON to file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

