"""
Raw trip extraction.

Two strategies share one interface:

- ``PayloadExtractor`` pulls the ``searchResultItemList`` JSON array out of the
  page source with a bounded regex (no full page parse) and returns
  ``RawTripGroup`` objects, one per vessel.
- ``DomExtractor`` walks the rendered search page and returns one
  ``RawTripRecord`` per bookable date row. Sold-out rows are dropped here.

Both return "nothing" rather than raising when the page has no trip data.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from parsel import Selector

from reconocedor.items import RawTripGroup, RawTripRecord
from reconocedor.utils import (
    LOOKS_LIKE_PRICE_OR_AVAILABILITY,
    classify_availability,
    clean,
    find_availability,
    find_date,
    find_duration,
    find_price_token,
    parse_price_digits,
    parse_rating,
)

logger = logging.getLogger(__name__)


class TripExtractor(ABC):
    kind: str = ""

    @abstractmethod
    def extract(self, source):
        ...


# ---------------------------
# Embedded payload
# ---------------------------

PAYLOAD_SIBLING_KEYS = (
    "availableHeaderText",
    "availableHeaderTemplate",
    "hasSelectedFilters",
    "selectedFilters",
)

PAYLOAD_RE = re.compile(
    r'searchResultItemList"\s*:\s*(\[[\s\S]*?\])'
    r'(?=\s*,\s*"(?:' + "|".join(PAYLOAD_SIBLING_KEYS) + r')")'
)


class PayloadExtractor(TripExtractor):
    kind = "payload"

    def extract(self, raw_text: str) -> Optional[List[RawTripGroup]]:
        """None when the marker is missing or the array does not decode."""
        m = PAYLOAD_RE.search(raw_text or "")
        if not m:
            return None
        try:
            data = json.loads(m.group(1))
        except ValueError as e:
            logger.warning("Malformed searchResultItemList payload: %s", e)
            return None
        if not isinstance(data, list):
            return None
        return [RawTripGroup.from_payload(o) for o in data if isinstance(o, dict)]


# ---------------------------
# Rendered DOM
# ---------------------------

CONTAINER_SELECTOR = "div.search-result-item"
DATE_ROW_SELECTOR = ".itinerary-row"
RATING_BLOCK_SELECTOR = ".boat-info"
PHOTO_PATH_MARKER = "/images/boats/"

MIN_NAME_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 40


@dataclass(frozen=True)
class FieldRule:
    """A CSS selector plus the test its text has to pass."""
    selector: str
    accept: Callable[[str], bool]


def _name_ok(text: str) -> bool:
    return len(text) > MIN_NAME_LENGTH


def _description_ok(text: str) -> bool:
    return len(text) > MIN_DESCRIPTION_LENGTH and not LOOKS_LIKE_PRICE_OR_AVAILABILITY.search(text)


NAME_RULES = (
    FieldRule("h2", _name_ok),
    FieldRule("h3", _name_ok),
    FieldRule("[class*='boat-name']", _name_ok),
    FieldRule("[class*='title']", _name_ok),
    FieldRule("a[class*='name']", _name_ok),
)

DESCRIPTION_RULES = (
    FieldRule("[class*='snippet']", _description_ok),
    FieldRule("[class*='description']", _description_ok),
    FieldRule("p", _description_ok),
)


def _node_text(node) -> str:
    return clean(node.xpath("normalize-space(string(.))").get())


def first_text(node, rules: Sequence[FieldRule]) -> str:
    """Text of the first element, across rules in order, that its rule accepts."""
    for rule in rules:
        for el in node.css(rule.selector):
            text = _node_text(el)
            if text and rule.accept(text):
                return text
    return ""


def first_photo(node, marker: str = PHOTO_PATH_MARKER):
    for img in node.css("img"):
        src = img.attrib.get("src") or img.attrib.get("data-src") or ""
        if marker in src:
            return src.strip(), clean(img.attrib.get("alt"))
    return "", ""


class DomExtractor(TripExtractor):
    kind = "dom"

    def __init__(
        self,
        container_selector: str = CONTAINER_SELECTOR,
        row_selector: str = DATE_ROW_SELECTOR,
        photo_marker: str = PHOTO_PATH_MARKER,
    ):
        self.container_selector = container_selector
        self.row_selector = row_selector
        self.photo_marker = photo_marker

    def extract(self, tree) -> List[RawTripRecord]:
        """``tree`` is a parsel Selector, a Scrapy response or raw HTML."""
        if isinstance(tree, str):
            tree = Selector(text=tree)
        records: List[RawTripRecord] = []
        for i, container in enumerate(tree.css(self.container_selector), start=1):
            try:
                records.extend(self._extract_container(container, i))
            except Exception as e:
                logger.error("Failed to extract trip container %d: %s", i, e, exc_info=True)
        return records

    def _extract_container(self, container, position: int) -> List[RawTripRecord]:
        name = first_text(container, NAME_RULES) or f"Trip {position}"
        photo_url, photo_alt = first_photo(container, self.photo_marker)
        rating = ""
        for block in container.css(RATING_BLOCK_SELECTOR):
            rating = parse_rating(_node_text(block))
            if rating:
                break
        vessel = {
            "name": name,
            "description": first_text(container, DESCRIPTION_RULES),
            "rating": rating,
            "photo_url": photo_url,
            "photo_alt": photo_alt or (name if photo_url else ""),
        }

        out = []
        for row in container.css(self.row_selector):
            record = self._extract_row(_node_text(row), vessel)
            if record is not None:
                out.append(record)
        return out

    def _extract_row(self, text: str, vessel: dict) -> Optional[RawTripRecord]:
        date = find_date(text)
        if not date:
            return None
        availability, is_full, spots = classify_availability(find_availability(text))
        if is_full or spots == 0:
            logger.debug("Skipping unavailable row: %s", text)
            return None
        price_text = find_price_token(text)
        return RawTripRecord(
            date=date,
            duration=find_duration(text),
            price_text=price_text,
            price=parse_price_digits(price_text),
            availability=availability,
            is_full=is_full,
            spots_left=spots,
            **vessel,
        )
