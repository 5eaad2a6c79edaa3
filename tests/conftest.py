"""
Shared fixtures: search pages built inline, no network or browser needed.
"""
import json
from datetime import datetime

import pytest
import pytz


def itinerary(
    price="1,200",
    date="5 Mar 2027",
    days_nights="7D/6N",
    availability_text="available",
    sold_out=False,
    tours_available=True,
    remaining=10,
):
    entry = {
        "price": price,
        "departureDateFormatted": date,
        "daysNights": days_nights,
        "availabilityText": availability_text,
        "isSoldOut": sold_out,
        "toursAvailable": tours_available,
    }
    if remaining is not None:
        entry["tourAvailability"] = remaining
    return entry


def boat(name="Galápagos Sky", itineraries=None, **extra):
    data = {
        "boatName": name,
        "boatImageLink": "https://img.liveaboard.com/images/boats/galapagos-sky.jpg",
        "starRating": "4.9",
        "snippet": "Steel-hull liveaboard running the northern route to Wolf and Darwin.",
        "cruiseSearchItineraryList": [itinerary()] if itineraries is None else itineraries,
    }
    data.update(extra)
    return data


def payload_page(boats, sibling="availableHeaderText"):
    """Page source with the search payload embedded in an inline state script."""
    state = (
        '{"searchPage": {"searchResultItemList": '
        + json.dumps(boats)
        + ', "' + sibling + '": "12 liveaboards found", "page": 1}}'
    )
    return (
        "<!DOCTYPE html><html><head><title>Galapagos liveaboards</title>"
        "<script>window.__INITIAL_STATE__ = " + state + ";</script>"
        "</head><body><div id='app'></div></body></html>"
    )


RENDERED_PAGE = """
<html><body>
<div class="search-results">
  <div class="search-result-item">
    <h2>Galápagos Sky</h2>
    <div class="boat-info">4.9 212 reviews</div>
    <p class="snippet">A classic steel-hull liveaboard cruising the northern islands for hammerheads.</p>
    <img src="https://img.liveaboard.com/images/logos/partner.png" alt="partner">
    <img src="https://img.liveaboard.com/images/boats/galapagos-sky.jpg" alt="Galapagos Sky at anchor">
    <div class="itinerary-row">5 Mar 2027 7D/6N $2,000 FULL</div>
    <div class="itinerary-row">12 Mar 2027 7D/6N $2,150 only 3 spaces left</div>
    <div class="itinerary-row">19/03/2027 8D/7N $3,100 Available</div>
    <div class="itinerary-row">Flexible dates on request</div>
  </div>
  <div class="search-result-item">
    <span class="boat-name">Hum</span>
    <div class="itinerary-row">2 Apr 2027 $1,500 available</div>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 17, 12, 30, 0, tzinfo=pytz.utc)


@pytest.fixture
def rendered_page():
    return RENDERED_PAGE
