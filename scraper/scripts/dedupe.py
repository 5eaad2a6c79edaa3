#!/usr/bin/env python3
# Merge result documents; earlier files win on (name, date).
import sys

from reconocedor.assemble import FILTERED_OUT_NOTE, read_document, write_document
from reconocedor.settings import RECO_SOURCE
from reconocedor.dedupe import Deduplicator
from reconocedor.items import TripOffering
from reconocedor.utils import utc_now_iso

def merge(docs):
    seen = Deduplicator()
    kept = []
    for doc in docs:
        for raw in doc.get("trips") or []:
            trip = TripOffering.model_validate(raw)
            if seen.add(trip):
                kept.append(trip)
    return kept

def main(out_path, *in_paths):
    docs = [read_document(p) for p in in_paths]
    kept = merge(docs)
    base = dict(docs[0]) if docs else {}
    base.update({
        "lastUpdated": utc_now_iso(),
        "totalTrips": len(kept),
        "trips": [t.to_dict() for t in kept],
    })
    base.setdefault("filteredOut", FILTERED_OUT_NOTE)
    base.setdefault("source", RECO_SOURCE)
    write_document(out_path, base)
    return len(kept)

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: dedupe.py <out.json> <in.json> [<in.json> ...]"); sys.exit(1)
    n = main(sys.argv[1], *sys.argv[2:])
    print(f"{n} trips written to {sys.argv[1]}")
