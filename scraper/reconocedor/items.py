from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------
# Raw shapes (extractor output)
# ---------------------------

def _text(v) -> str:
    if v is None:
        return ""
    return str(v).strip()

def _int_or_none(v) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None

@dataclass
class RawItinerary:
    """One departure of a vessel as found in the embedded search payload."""
    price: Any = None
    departure_date: str = ""
    duration: str = ""
    availability_text: str = ""
    is_sold_out: bool = False
    tours_available: Any = None
    remaining: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "RawItinerary":
        return cls(
            price=data.get("price"),
            departure_date=_text(data.get("departureDateFormatted")),
            duration=_text(data.get("daysNights")),
            availability_text=_text(data.get("availabilityText")),
            is_sold_out=bool(data.get("isSoldOut")),
            tours_available=data.get("toursAvailable"),
            remaining=_int_or_none(data.get("tourAvailability")),
        )

@dataclass
class RawTripGroup:
    """A vessel with its itinerary list, straight from the payload."""
    name: str = ""
    image_url: str = ""
    rating: str = ""
    description: str = ""
    itineraries: List[RawItinerary] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "RawTripGroup":
        entries = data.get("cruiseSearchItineraryList") or []
        return cls(
            name=_text(data.get("boatName")),
            image_url=_text(data.get("boatImageLink")),
            rating=_text(data.get("starRating")),
            description=_text(data.get("snippet")),
            itineraries=[RawItinerary.from_payload(e) for e in entries if isinstance(e, dict)],
        )

@dataclass
class RawTripRecord:
    """One (vessel, date) row read off the rendered search page."""
    name: str
    date: str
    duration: str = ""
    price_text: str = ""
    price: Optional[float] = None
    availability: str = "unknown"
    is_full: bool = False
    spots_left: int = 0
    rating: str = ""
    description: str = ""
    photo_url: str = ""
    photo_alt: str = ""

# ---------------------------
# Canonical offering
# ---------------------------

class Photo(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = ""
    alt: str = ""

class TripOffering(BaseModel):
    """
    Canonical bookable trip. Field names are snake_case in Python and
    camelCase in the written JSON (``model_dump(by_alias=True)``).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    date: str
    duration: str = ""
    price: str = ""
    availability: str = "unknown"
    is_available: bool = Field(default=False, alias="isAvailable")
    spots_left: int = Field(default=0, alias="spotsLeft")
    your_price: str = Field(default="", alias="yourPrice")
    rating: str = ""
    description: str = ""
    photo: Photo = Photo()
    reconocido_at: str = Field(default="", alias="reconocidoAt")

    @property
    def dedupe_key(self) -> Tuple[str, str]:
        # exact strings, no case or whitespace folding
        return (self.name, self.date)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
