import logging

import requests

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """Seed data could not be fetched, parsed or stored."""


def fetch_seed_records(url, timeout=30):
    logger.info("Fetching seed data from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        records = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise SeedError(f"Could not fetch seed data from {url}: {exc}") from exc
    if not isinstance(records, list):
        raise SeedError(f"Seed data from {url} is not a JSON array")
    return records
