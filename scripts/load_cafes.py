"""
Cafe seeding script
-------------------
Reads vocabulary and cafe records from JSONL files and stores them.

Vocabulary lines look like {"kind": "vibes", "id": "cozy", "name": "Cozy", "icon": "☕"}.
Cafe lines follow the cafe create payload, optionally with a "reviews" list;
seeded reviews are stored approved.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# make the nongkrongr package importable when run from a checkout
sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import NongkrongrError
from nongkrongr.db.init_db import init_db
from nongkrongr.db.session import SessionLocal
from nongkrongr.models.cafe import Cafe
from nongkrongr.schemas.cafe import CafeCreate
from nongkrongr.schemas.review import ReviewCreate
from nongkrongr.schemas.vocabulary import VocabularyCreate
from nongkrongr.services import cafes as cafe_service
from nongkrongr.services import reviews as review_service
from nongkrongr.services import vocabulary


def iter_jsonl(path: Path):
    """Yield one dict per non-empty, parseable line."""
    with path.open("r", encoding="utf-8") as fp:
        for line in fp:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def load_vocabulary(path: Path, db: Session) -> tuple[int, int]:
    added = skipped = 0
    for record in iter_jsonl(path):
        model = vocabulary.KINDS.get(record.pop("kind", ""))
        if model is None:
            skipped += 1
            continue
        try:
            vocabulary.create_item(db, model, VocabularyCreate(**record))
            added += 1
        except (ValidationError, NongkrongrError) as exc:
            skipped += 1
            print(f"[SKIP] {record.get('id')}: {exc}", file=sys.stderr)
    return added, skipped


def load_cafes(path: Path, db: Session) -> tuple[int, int, int]:
    success = skipped = failed = 0
    for record in iter_jsonl(path):
        reviews = record.pop("reviews", []) or []
        try:
            payload = CafeCreate(**record)
        except ValidationError as exc:
            skipped += 1
            if skipped <= 5:
                print(f"[SKIP] {record.get('name')}: {exc.error_count()} invalid fields", file=sys.stderr)
            continue
        if payload.id and db.get(Cafe, payload.id) is not None:
            skipped += 1
            continue

        try:
            cafe = cafe_service.create_cafe(db, payload)
            for raw in reviews:
                review = review_service.add_review(db, cafe.id, ReviewCreate(**raw))
                review_service.update_review_status(db, review.id, "approved")
            success += 1
            if success % 10 == 0:
                print(f"[INFO] {success} cafes loaded...", file=sys.stderr)
        except (ValidationError, NongkrongrError) as exc:
            failed += 1
            if failed <= 5:
                print(f"[FAIL] {payload.name}: {exc}", file=sys.stderr)
    return success, skipped, failed


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed cafes from JSONL")
    parser.add_argument("--file", type=Path, default=Path("cafes.jsonl"), help="cafe JSONL (default ./cafes.jsonl)")
    parser.add_argument("--vocab", type=Path, default=None, help="vibes/amenities/tags JSONL loaded first")
    args = parser.parse_args()

    if not args.file.exists():
        raise SystemExit(f"File not found: {args.file}")

    init_db()
    db = SessionLocal()
    try:
        if args.vocab is not None:
            added, vocab_skipped = load_vocabulary(args.vocab, db)
            print(f"Vocabulary: {added} added, {vocab_skipped} skipped")
        print(f"Loading cafes from {args.file}...")
        success, skipped, failed = load_cafes(args.file, db)

        print("\n" + "=" * 60)
        print("Cafe load finished")
        print("=" * 60)
        print(f"  loaded:  {success}")
        print(f"  skipped: {skipped}")
        print(f"  failed:  {failed}")
        print("=" * 60)
    finally:
        db.close()


if __name__ == "__main__":
    main()
