"""Bulk-load people profiles from a JSON file into MongoDB.

Usage::

    python -m jodi.seed_people people.json
"""
import argparse
import json
import logging
from datetime import datetime, timezone
from typing import Dict, List

from pydantic import ValidationError

from jodi.db.mongo import check_connection, get_people_collection
from jodi.filters.budget import budget_fields
from jodi.models.person import PersonCreate, PersonSource

logger = logging.getLogger(__name__)


def load_people(file_name: str) -> List[Dict]:
    """Loads profile data from the specified JSON file."""
    with open(file_name, "r", encoding="utf-8") as f:
        people = json.load(f)
    if not isinstance(people, list):
        raise ValueError(f"{file_name} must contain a JSON array of people")
    logger.info("✅ Loaded %d people from %s", len(people), file_name)
    return people


def build_person_documents(records: List[Dict]) -> List[Dict]:
    """Validate raw records and turn them into people documents.

    Invalid records are skipped with a warning so one bad row does not stop
    the whole import.
    """
    documents = []
    now = datetime.now(timezone.utc)
    for index, record in enumerate(records):
        try:
            person = PersonCreate.model_validate(record)
        except ValidationError as e:
            logger.warning("⚠️ Skipping record %d: %s", index, e.errors()[0]["msg"])
            continue

        doc = person.model_dump(by_alias=True, exclude_none=True)
        numeric, _ = budget_fields(doc.get("budget"))
        doc.update(numeric)
        photos = record.get("photos") or []
        doc.update({
            "photos": photos,
            "profilePicture": photos[0] if photos else None,
            "source": PersonSource.ADMIN.value,
            "createdAt": now,
            "updatedAt": now,
        })
        documents.append(doc)
    return documents


def main(argv=None):
    parser = argparse.ArgumentParser(description="Insert people profiles from a JSON file.")
    parser.add_argument("file", help="JSON array of people records")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    documents = build_person_documents(load_people(args.file))
    if not documents:
        logger.warning("Nothing to insert.")
        return 1

    if not check_connection():
        logger.error("Cannot proceed with insertion due to MongoDB connection failure.")
        return 1

    result = get_people_collection().insert_many(documents, ordered=False)
    logger.info("✅ Inserted %d people.", len(result.inserted_ids))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
