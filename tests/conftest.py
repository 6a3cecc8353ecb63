import mongomock
import pytest

import app as app_module
from settings import Settings

FIXTURE_RECORDS = [
    {"title": "Backpack", "description": "Everyday pack", "price": 50,
     "sold": True, "dateOfSale": "2022-03-05", "category": "A"},
    {"title": "Jacket", "description": "Rain jacket", "price": 150,
     "sold": False, "dateOfSale": "2022-03-10", "category": "B"},
    {"title": "Monitor", "description": "27 inch display", "price": 999,
     "sold": True, "dateOfSale": "2022-04-01", "category": "A"},
]


@pytest.fixture
def collection():
    return mongomock.MongoClient().transactionsDB.transactions


@pytest.fixture
def app(collection):
    settings = Settings(seed_url="https://seed.example/transactions.json", log_level="WARNING")
    flask_app = app_module.create_app(settings, collection=collection)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def service(app):
    return app.extensions["transactions"]


@pytest.fixture
def seeded(service):
    service.initialize(FIXTURE_RECORDS)
    return service
