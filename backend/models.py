"""
Transaction documents for MongoDB.
No ODM class, documents are stored as plain dicts.

Example stored document:
{
    "_id": ObjectId("..."),
    "id": 1,
    "title": "Fjallraven  - Foldsack No. 1 Backpack",
    "description": "Your perfect pack for everyday use...",
    "price": 329.85,
    "category": "men's clothing",
    "sold": False,
    "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
    "dateOfSale": datetime(2021, 11, 27, 14, 59, 54),
    "saleDateInReferenceYear": datetime(2000, 11, 27, 20, 29, 54)
}

saleDateInReferenceYear is derived at seed time and never returned by the API.
"""
from datetime import datetime, timezone

from bson import ObjectId

from months import REFERENCE_DATE_FIELD, to_reference_year

TEXT_FIELDS = ("title", "description", "category", "image")

TRUE_STRINGS = ("true", "1", "yes")
FALSE_STRINGS = ("false", "0", "no", "")


def parse_sale_date(value):
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"dateOfSale must be an ISO-8601 string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_sold(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"sold must be a boolean, got {value!r}")


def to_document(record):
    """Convert one raw seed record into the document we store."""
    if not isinstance(record, dict):
        raise ValueError(f"Transaction record must be an object, got {type(record).__name__}")

    sale_date = parse_sale_date(record.get("dateOfSale"))
    stored_date = sale_date
    if sale_date.tzinfo is not None:
        stored_date = sale_date.astimezone(timezone.utc).replace(tzinfo=None)
    doc = {
        "sold": parse_sold(record.get("sold")),
        "dateOfSale": stored_date,
        REFERENCE_DATE_FIELD: to_reference_year(sale_date),
    }
    # No price means no price field, so the record stays out of every band.
    if record.get("price") not in (None, ""):
        doc["price"] = float(record["price"])
    for name in TEXT_FIELDS:
        if name in record:
            doc[name] = record[name]
    if "id" in record:
        doc["id"] = record["id"]
    return doc


def _format_date(value):
    # Mongo hands back naive UTC datetimes
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def serialize(doc):
    out = {k: v for k, v in doc.items() if k != REFERENCE_DATE_FIELD}
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    if isinstance(out.get("dateOfSale"), datetime):
        out["dateOfSale"] = _format_date(out["dateOfSale"])
    return out
