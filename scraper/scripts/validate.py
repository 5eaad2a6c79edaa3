#!/usr/bin/env python3
import sys, json
from collections import Counter
from pathlib import Path
import orjson
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))
from models import ResultDocument

def read_document(path):
    with open(path, "rb") as f:
        return orjson.loads(f.read())

def check_invariants(doc: dict) -> dict:
    trips = doc.get("trips") or []
    keys = Counter((t.get("name"), t.get("date")) for t in trips)
    duplicates = sorted(f"{n} | {d}" for (n, d), c in keys.items() if c > 1)
    unavailable = [t.get("name") for t in trips if not t.get("isAvailable") or not t.get("spotsLeft")]
    unpriced = [t.get("name") for t in trips if not t.get("price")]
    return {
        "count_total": len(trips),
        "duplicate_keys": duplicates,
        "unavailable": len(unavailable),
        "without_price": len(unpriced),
        "vessels": len({t.get("name") for t in trips}),
    }

def main(in_path, out_dir="out"):
    doc = read_document(in_path)

    errors = []
    try:
        ResultDocument.model_validate(doc)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]

    inv = check_invariants(doc)
    status_ok = not errors and not inv["duplicate_keys"] and inv["unavailable"] == 0

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    summary = {"input": str(in_path), "status_ok": status_ok, "schema_errors": errors, "overall": inv}
    (out / "qa_summary.json").write_text(json.dumps(summary, indent=2), encoding="utf-8")

    md_lines = []
    md_lines.append("# Reconocedor QA Summary")
    md_lines.append("")
    md_lines.append(f"- Trips: **{inv['count_total']}** across **{inv['vessels']}** vessels")
    md_lines.append(f"- Duplicate (name, date) keys: **{len(inv['duplicate_keys'])}**")
    md_lines.append(f"- Unavailable trips listed: **{inv['unavailable']}**")
    md_lines.append(f"- Trips without a source price: **{inv['without_price']}**")
    md_lines.append(f"- Schema errors: **{len(errors)}**")
    for err in errors[:20]:
        md_lines.append(f"  - {err}")
    md_lines.append("")
    md_lines.append(f"**Status:** {'✅ PASS' if status_ok else '❌ FAIL'}")
    (out / "qa_summary.md").write_text("\n".join(md_lines), encoding="utf-8")

    return 0 if status_ok else 1

if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("Usage: validate.py <reconocido-data.json> [out_dir]"); sys.exit(1)
    sys.exit(main(*sys.argv[1:]))
