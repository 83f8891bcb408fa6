"""Pytest configuration and fixtures for payments-model tests.

Provides sample raw resources for every payment variant, in the shape
the banking API returns them, and sample request sections.
"""

import copy
from typing import Any, Callable, Generator

import pytest

from payments_model.config import get_settings

# === Sample Data ===

ACCOUNT_REF = {"type": "depositAccount", "id": "10001"}
CUSTOMER_REF = {"type": "individualCustomer", "id": "10000"}

ACH_COUNTERPARTY = {
    "routingNumber": "812345678",
    "accountNumber": "1000000001",
    "accountType": "Checking",
    "name": "Jane Doe",
}

WIRE_COUNTERPARTY = {
    "routingNumber": "812345678",
    "accountNumber": "1000000002",
    "name": "April Oniel",
    "address": {
        "street": "20 Ingram St",
        "city": "Forest Hills",
        "state": "NY",
        "postalCode": "11375",
        "country": "US",
    },
}

RAW_RESOURCES: dict[str, dict[str, Any]] = {
    "achPayment": {
        "id": "50",
        "type": "achPayment",
        "attributes": {
            "createdAt": "2020-01-13T16:01:19.346Z",
            "status": "Pending",
            "counterparty": ACH_COUNTERPARTY,
            "description": "Paycheck",
            "addenda": "Monthly salary",
            "direction": "Credit",
            "amount": 10000,
            "tags": {"payroll": "2020-01"},
        },
        "relationships": {
            "account": {"data": ACCOUNT_REF},
            "customer": {"data": CUSTOMER_REF},
            "counterparty": {"data": {"type": "counterparty", "id": "4567"}},
            "transaction": {"data": {"type": "transaction", "id": "4003"}},
        },
    },
    "bookPayment": {
        "id": "1232",
        "type": "bookPayment",
        "attributes": {
            "createdAt": "2021-02-21T13:03:19.025Z",
            "status": "Sent",
            "direction": "Credit",
            "description": "Rent for March",
            "amount": 1500,
        },
        "relationships": {
            "account": {"data": ACCOUNT_REF},
            "customers": {
                "data": [
                    {"type": "customer", "id": "10000"},
                    {"type": "customer", "id": "10002"},
                ]
            },
            "counterpartyAccount": {"data": {"type": "depositAccount", "id": "10002"}},
            "counterpartyCustomer": {"data": {"type": "customer", "id": "10002"}},
            "transaction": {"data": {"type": "transaction", "id": "1423"}},
        },
    },
    "wirePayment": {
        "id": "3",
        "type": "wirePayment",
        "attributes": {
            "createdAt": "2021-06-06T07:24:23.380Z",
            "status": "Clearing",
            "counterparty": WIRE_COUNTERPARTY,
            "description": "Invoice 2021-0601",
            "direction": "Credit",
            "amount": 200000,
        },
        "relationships": {
            "account": {"data": ACCOUNT_REF},
            "customer": {"data": CUSTOMER_REF},
        },
    },
    "billPayment": {
        "id": "21",
        "type": "billPayment",
        "attributes": {
            "createdAt": "2022-03-01T10:00:00.000Z",
            "status": "Pending",
            "direction": "Debit",
            "description": "Electric bill",
            "amount": 8450,
        },
        "relationships": {
            "account": {"data": ACCOUNT_REF},
        },
    },
    "achReceivedPayment": {
        "id": "1337",
        "type": "achReceivedPayment",
        "attributes": {
            "createdAt": "2022-02-01T12:03:14.406Z",
            "status": "Advanced",
            "wasAdvanced": True,
            "completionDate": "2022-02-05",
            "companyName": "UBER LTD",
            "counterpartyRoutingNumber": "051402372",
            "description": "Sandbox",
            "traceNumber": "051402379417003",
            "secCode": "PPD",
            "amount": 100000,
        },
        "relationships": {
            "account": {"data": ACCOUNT_REF},
            "customer": {"data": CUSTOMER_REF},
            "receivePaymentTransaction": {"data": {"type": "transaction", "id": "101"}},
            "paymentAdvanceTransaction": {"data": {"type": "transaction", "id": "202"}},
        },
    },
}


# === Fixtures ===


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def raw_resource() -> Callable[[str], dict[str, Any]]:
    """Factory returning a fresh deep copy of a sample resource by type."""

    def _make(payment_type: str) -> dict[str, Any]:
        return copy.deepcopy(RAW_RESOURCES[payment_type])

    return _make


@pytest.fixture
def ach_payment_raw(raw_resource: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
    return raw_resource("achPayment")


@pytest.fixture
def book_payment_raw(raw_resource: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
    return raw_resource("bookPayment")


@pytest.fixture
def wire_payment_raw(raw_resource: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
    return raw_resource("wirePayment")


@pytest.fixture
def bill_payment_raw(raw_resource: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
    return raw_resource("billPayment")


@pytest.fixture
def received_payment_raw(raw_resource: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
    return raw_resource("achReceivedPayment")


@pytest.fixture
def ach_counterparty() -> dict[str, Any]:
    return copy.deepcopy(ACH_COUNTERPARTY)


@pytest.fixture
def wire_counterparty() -> dict[str, Any]:
    return copy.deepcopy(WIRE_COUNTERPARTY)


@pytest.fixture
def account_relationships() -> dict[str, Any]:
    return {"account": dict(ACCOUNT_REF)}
