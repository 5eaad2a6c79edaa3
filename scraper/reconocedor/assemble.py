import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import orjson

from reconocedor.items import TripOffering
from reconocedor.utils import utc_now_iso

logger = logging.getLogger(__name__)

FILTERED_OUT_NOTE = "FULL trips excluded from results"


class ResultAssembler:
    """Wraps the final offerings in the output document and writes it as JSON."""

    def __init__(self, output_file: str, source: str):
        self.output_path = Path(output_file)
        self.source = source

    def assemble(self, offerings: Iterable[TripOffering], now: Optional[datetime] = None) -> Dict[str, Any]:
        trips = [o.to_dict() for o in offerings]
        return {
            "lastUpdated": utc_now_iso(now),
            "totalTrips": len(trips),
            "filteredOut": FILTERED_OUT_NOTE,
            "source": self.source,
            "trips": trips,
        }

    def write(self, offerings: Iterable[TripOffering], now: Optional[datetime] = None) -> Dict[str, Any]:
        doc = self.assemble(offerings, now=now)
        write_document(self.output_path, doc)
        logger.info("Data saved to %s", self.output_path)
        return doc


def write_document(path, doc: Dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(doc, option=orjson.OPT_INDENT_2))


def read_document(path) -> Dict[str, Any]:
    return orjson.loads(Path(path).read_bytes())
