"""
Mongo filters and aggregation pipelines behind the dashboard endpoints.
Everything here only builds query documents, nothing talks to the database.
"""
import re

from months import month_filter

# (label, lower bound inclusive, upper bound exclusive or None)
PRICE_BANDS = (
    ("0-100", 0, 100),
    ("101-200", 100, 200),
    ("201-300", 200, 300),
    ("301-400", 300, 400),
    ("401-500", 400, 500),
    ("501-600", 500, 600),
    ("601-700", 600, 700),
    ("701-800", 700, 800),
    ("801-900", 800, 900),
    ("901-Infinity", 900, None),
)


def _parse_price(token):
    try:
        return float(token)
    except ValueError:
        return None


def search_filter(search):
    if not search:
        return {}
    pattern = {"$regex": re.escape(search), "$options": "i"}
    clauses = [{"title": pattern}, {"description": pattern}]
    price = _parse_price(search)
    if price is not None:
        clauses.append({"price": price})
    return {"$or": clauses}


def listing_filter(month=None, search=None):
    query = month_filter(month)
    query.update(search_filter(search))
    return query


def statistics_pipeline(month=None):
    return [
        {"$match": month_filter(month)},
        {"$group": {
            "_id": None,
            "totalSales": {"$sum": "$price"},
            "soldItems": {"$sum": {"$cond": ["$sold", 1, 0]}},
            "unsoldItems": {"$sum": {"$cond": ["$sold", 0, 1]}},
        }},
    ]


def price_band_filter(month, lower, upper):
    price = {"$gte": lower}
    if upper is not None:
        price["$lt"] = upper
    query = month_filter(month)
    query["price"] = price
    return query


def category_pipeline(month=None):
    return [
        {"$match": month_filter(month)},
        {"$group": {"_id": "$category", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]
