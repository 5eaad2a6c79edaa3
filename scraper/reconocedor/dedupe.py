from typing import Iterable, List, Set, Tuple

from reconocedor.items import TripOffering


def key(offering: TripOffering) -> Tuple[str, str]:
    return offering.dedupe_key


class Deduplicator:
    """
    Accumulates (name, date) keys across pages. The first offering seen for a
    key is kept; later ones are rejected even if their other fields differ.
    """

    def __init__(self):
        self._seen: Set[Tuple[str, str]] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, offering: TripOffering) -> bool:
        return key(offering) in self._seen

    def add(self, offering: TripOffering) -> bool:
        """True if the offering is new and was kept."""
        k = key(offering)
        if k in self._seen:
            return False
        self._seen.add(k)
        return True

    def extend(self, offerings: Iterable[TripOffering]) -> List[TripOffering]:
        return [o for o in offerings if self.add(o)]


def dedupe(offerings: Iterable[TripOffering]) -> List[TripOffering]:
    return Deduplicator().extend(offerings)
