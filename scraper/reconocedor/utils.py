# ---------------------------
# Tolerant field parsers
# ---------------------------
# Every helper here returns a default ("" / None / 0) instead of raising, so a
# missing field is an ordinary outcome for the caller.
import re
from datetime import datetime
from typing import Optional, Tuple

import pytz

UTC = pytz.utc

def utc_now_iso(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = UTC.localize(now)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def _norm_spaces(s: str) -> str:
    return re.sub(r"[\u00A0\u202F\s]+", " ", s or "")

def clean(s) -> str:
    return _norm_spaces(s if isinstance(s, str) else "").strip()

# ---------------------------
# Prices
# ---------------------------

def parse_price_text(value) -> Optional[float]:
    """
    Payload prices: "1,200" / "1200.50" / 1200. Thousands separators are
    dropped. Zero, negative or unparseable values give None.
    """
    if value is None or isinstance(value, bool):
        return None
    t = str(value).replace(",", "").strip()
    try:
        p = float(t)
    except ValueError:
        return None
    return p if p > 0 else None

def parse_price_digits(text: str) -> Optional[float]:
    """Page prices: "$2,000" -> 2000.0. Everything but digits and dots is stripped."""
    t = re.sub(r"[^\d.]", "", text or "")
    if not t:
        return None
    try:
        p = float(t)
    except ValueError:
        return None
    return p if p > 0 else None

def format_amount(p: float) -> str:
    """Grouped thousands, up to three decimals, trailing zeros removed: 1200 -> "1,200"."""
    s = f"{p:,.3f}".rstrip("0").rstrip(".")
    return s

def format_price(p: Optional[float]) -> str:
    return f"$ {format_amount(p)}" if p and p > 0 else ""

def apply_markup(p: Optional[float], rate: float) -> Optional[float]:
    if not p or p <= 0:
        return None
    return round(p * (1 + rate), 2)

def format_your_price(p: Optional[float], rate: float) -> str:
    """Marked-up price as "$1,380.00"; empty when the source price is unknown."""
    marked = apply_markup(p, rate)
    if marked is None:
        return ""
    return f"${marked:,.2f}"

# ---------------------------
# Tokens found in rendered date rows
# ---------------------------

MONTHS_ABBR = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec"

RE_DATE = re.compile(
    rf"\b(\d{{1,2}}\s+(?:{MONTHS_ABBR})[a-z]*\.?\s+\d{{4}}|\d{{1,2}}/\d{{1,2}}/\d{{4}})\b",
    re.I,
)
RE_PRICE = re.compile(r"\$\s*[\d,]+(?:\.\d{1,2})?")
RE_AVAILABILITY = re.compile(r"\b(available|full|only\s+\d+\s+spaces?\s+left)\b", re.I)
RE_DURATION = re.compile(r"\b(\d{1,2}\s*D\s*/\s*\d{1,2}\s*N)\b", re.I)
RE_RATING = re.compile(r"(\d+(?:\.\d+)?)\s+([\d,]+)\s+reviews?\b", re.I)

def _first_match(rx: re.Pattern, text: str) -> str:
    m = rx.search(text or "")
    return clean(m.group(1) if m.groups() else m.group(0)) if m else ""

def find_date(text: str) -> str:
    return _first_match(RE_DATE, text)

def find_price_token(text: str) -> str:
    return _first_match(RE_PRICE, text)

def find_availability(text: str) -> str:
    return _first_match(RE_AVAILABILITY, text)

def find_duration(text: str) -> str:
    return re.sub(r"\s+", "", _first_match(RE_DURATION, text)).upper()

def parse_rating(text: str) -> str:
    """ "4.8 127 reviews" -> "4.8" """
    m = RE_RATING.search(text or "")
    return m.group(1) if m else ""

def classify_availability(phrase: str) -> Tuple[str, bool, int]:
    """
    Returns (normalized phrase, is_full, spots_left).

    "only 3 spaces left" -> ("only 3 spaces left", False, 3)
    "Available"          -> ("available", False, 10)
    "FULL"               -> ("full", True, 0)
    anything else        -> ("unknown", False, 0)
    """
    norm = clean(phrase).lower()
    if not norm:
        return "unknown", False, 0
    is_full = "full" in norm
    m = re.search(r"(\d+)", norm)
    if m:
        spots = int(m.group(1))
    elif "available" in norm:
        spots = 10
    else:
        spots = 0
    return norm, is_full, spots

LOOKS_LIKE_PRICE_OR_AVAILABILITY = re.compile(
    r"\$\s*[\d,]+|\bavailable\b|\bfull\b|\bspaces?\s+left\b|\bsold\s*out\b", re.I
)
