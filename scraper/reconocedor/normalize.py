"""
Raw trip -> canonical ``TripOffering``.

Payload groups fan out into one offering per itinerary entry; rendered rows
map one to one. Both paths price the same way: ``yourPrice`` is the source
price times ``1 + markup_rate``, rounded to cents, and stays empty whenever the
source price is missing or zero.
"""
from datetime import datetime
from typing import List, Optional, Union

from reconocedor.items import Photo, RawItinerary, RawTripGroup, RawTripRecord, TripOffering
from reconocedor.utils import format_price, format_your_price, parse_price_text, utc_now_iso

# payload entries need more than this many free places to count as available
AVAILABLE_ABOVE = 5
DEFAULT_SPOTS = 10


def is_sold_out(entry: RawItinerary) -> bool:
    return entry.availability_text == "soldout" or entry.is_sold_out or not entry.tours_available


class Normalizer:
    def __init__(self, markup_rate: float):
        if markup_rate < 0:
            raise ValueError(f"markup_rate must be >= 0, got {markup_rate}")
        self.markup_rate = markup_rate

    def normalize(
        self, raw: Union[RawTripGroup, RawTripRecord], now: Optional[datetime] = None
    ) -> List[TripOffering]:
        if isinstance(raw, RawTripGroup):
            return self.normalize_group(raw, now=now)
        if isinstance(raw, RawTripRecord):
            return [self.normalize_record(raw, now=now)]
        raise TypeError(f"Cannot normalize {type(raw).__name__}")

    def normalize_group(self, group: RawTripGroup, now: Optional[datetime] = None) -> List[TripOffering]:
        stamp = utc_now_iso(now)
        out = []
        for entry in group.itineraries:
            if is_sold_out(entry):
                continue
            price = parse_price_text(entry.price)
            remaining = entry.remaining
            out.append(TripOffering(
                name=group.name,
                date=entry.departure_date,
                duration=entry.duration,
                price=format_price(price),
                availability=entry.availability_text or "available",
                is_available=remaining is not None and remaining > AVAILABLE_ABOVE,
                spots_left=remaining or DEFAULT_SPOTS,
                your_price=format_your_price(price, self.markup_rate),
                rating=group.rating,
                description=group.description,
                photo=Photo(url=group.image_url, alt=group.name),
                reconocido_at=stamp,
            ))
        return out

    def normalize_record(self, record: RawTripRecord, now: Optional[datetime] = None) -> TripOffering:
        return TripOffering(
            name=record.name,
            date=record.date,
            duration=record.duration,
            price=format_price(record.price),
            availability=record.availability,
            is_available=not record.is_full and record.spots_left > 0,
            spots_left=record.spots_left,
            your_price=format_your_price(record.price, self.markup_rate),
            rating=record.rating,
            description=record.description,
            photo=Photo(url=record.photo_url, alt=record.photo_alt),
            reconocido_at=utc_now_iso(now),
        )


def normalize(raw, markup_rate: float, now: Optional[datetime] = None) -> List[TripOffering]:
    return Normalizer(markup_rate).normalize(raw, now=now)
