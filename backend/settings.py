import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# --- Load environment ---

load_dotenv()

DEFAULT_MONGO_URI = "mongodb://127.0.0.1:27017/transactionsDB"
DEFAULT_SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


def _int_env(name, default):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _list_env(name, default):
    raw = os.getenv(name, "")
    values = [item.strip() for item in raw.split(",") if item.strip()]
    return values or list(default)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment (and .env)."""

    mongo_uri: str = DEFAULT_MONGO_URI
    database_name: str = "transactionsDB"
    collection_name: str = "transactions"
    seed_url: str = DEFAULT_SEED_URL
    seed_timeout: int = 30
    cors_origins: list = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        return cls(
            mongo_uri=os.getenv("MONGO_URI") or DEFAULT_MONGO_URI,
            database_name=os.getenv("MONGO_DB") or "transactionsDB",
            collection_name=os.getenv("MONGO_COLLECTION") or "transactions",
            seed_url=os.getenv("SEED_URL") or DEFAULT_SEED_URL,
            seed_timeout=_int_env("SEED_TIMEOUT", 30),
            cors_origins=_list_env("CORS_ORIGINS", ["*"]),
            host=os.getenv("HOST") or "0.0.0.0",
            port=_int_env("PORT", 5000),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
