import logging
from concurrent.futures import ThreadPoolExecutor

from models import serialize, to_document
from params import ListingParams
from queries import (
    PRICE_BANDS,
    category_pipeline,
    listing_filter,
    price_band_filter,
    statistics_pipeline,
)
from seed import SeedError

logger = logging.getLogger(__name__)

EMPTY_STATISTICS = {"totalSales": 0, "soldItems": 0, "unsoldItems": 0}


class CombinedViewError(Exception):
    """One of the combined view's parts failed."""


class TransactionService:
    """
    All reads and the seed write against the transactions collection.

    Built once by create_app and shared by every request; it holds nothing but
    the collection handle.
    """

    def __init__(self, collection):
        self.collection = collection

    # --- Seed ---

    def initialize(self, records):
        """Replace the whole collection with `records`. Returns the count inserted."""
        try:
            documents = [to_document(r) for r in records]
        except (TypeError, ValueError) as exc:
            raise SeedError(f"Invalid transaction record: {exc}") from exc

        # Not atomic: a failure after the delete leaves the collection empty.
        self.collection.delete_many({})
        if documents:
            self.collection.insert_many(documents)
        logger.info("Seeded %d transactions", len(documents))
        return len(documents)

    # --- Reads ---

    def list_transactions(self, params):
        cursor = (
            self.collection.find(listing_filter(params.month, params.search))
            .sort("_id", 1)
            .skip(params.skip)
            .limit(params.per_page)
        )
        return [serialize(doc) for doc in cursor]

    def statistics(self, month=None):
        result = list(self.collection.aggregate(statistics_pipeline(month)))
        if not result:
            return dict(EMPTY_STATISTICS)
        stats = result[0]
        return {name: stats.get(name, 0) for name in EMPTY_STATISTICS}

    def bar_chart(self, month=None):
        return [
            {"range": label,
             "count": self.collection.count_documents(price_band_filter(month, lower, upper))}
            for label, lower, upper in PRICE_BANDS
        ]

    def pie_chart(self, month=None):
        return [
            {"category": row["_id"], "count": row["count"]}
            for row in self.collection.aggregate(category_pipeline(month))
        ]

    def combined(self, month=None):
        """Run the four read views in parallel; fail as a whole if any part fails."""
        parts = {
            "transactions": (self.list_transactions, ListingParams(month=month)),
            "statistics": (self.statistics, month),
            "barChart": (self.bar_chart, month),
            "pieChart": (self.pie_chart, month),
        }
        with ThreadPoolExecutor(max_workers=len(parts)) as pool:
            futures = {name: pool.submit(fn, arg) for name, (fn, arg) in parts.items()}

        result = {}
        for name, future in futures.items():
            try:
                result[name] = future.result()
            except Exception as exc:
                raise CombinedViewError(f"{name} failed: {exc}") from exc
        return result
