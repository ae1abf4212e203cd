from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from storefront import providers, settings
from storefront.clock import FixedClock
from storefront.orders.adapters import CustomerDirectoryStub

NOW = datetime(2026, 10, 19, 10, 30)


@pytest.fixture(autouse=True)
def use_stubs_for_tests(monkeypatch):
    monkeypatch.setattr(settings, "USE_HTTP_ADAPTERS", False)
    monkeypatch.setattr(settings, "HTTP_RETRY_BACKOFF_BASE", 0.0)
    yield
    providers.reset_services()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def customers():
    return CustomerDirectoryStub(
        {
            42: {"name": "Ana Souza", "email": "ana@example.com", "password": "$2a$10$hash"},
            7: {"name": "Bruno Lima", "email": "bruno@example.com", "password": "$2a$10$other"},
        }
    )


@pytest.fixture
def services(clock, customers):
    return providers.build_services(clock=clock, customers=customers)


@pytest.fixture
def client(services, monkeypatch):
    monkeypatch.setattr(providers, "_services", services)
    from storefront.main import app

    with TestClient(app) as c:
        yield c
