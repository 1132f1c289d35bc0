import asyncio
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional

import httpx
import pytest

from flight_aggregator.domain.models import Flight, SearchCriteria


CRAZYAIR_BODY = """
[
    {
        "airline": "British Airways",
        "price": 100.00,
        "cabinclass": "E",
        "departureAirportCode": "LHR",
        "destinationAirportCode": "AMS",
        "departureDate": "2023-01-01T10:00:00",
        "arrivalDate": "2023-01-01T12:00:00"
    }
]
"""

TOUGHJET_BODY = """
[
    {
        "carrier": "KLM",
        "basePrice": 90.00,
        "tax": 10.00,
        "discount": 5.00,
        "departureAirportName": "LHR",
        "arrivalAirportName": "AMS",
        "outboundDateTime": "2023-01-01T11:00:00Z",
        "inboundDateTime": "2023-01-01T13:00:00Z"
    }
]
"""


class FakeSupplier:
    """Fornecedor em memória para testar o orquestrador."""

    def __init__(
        self,
        name: str,
        flights: Optional[List[Flight]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.name = name
        self._flights = flights or []
        self._error = error
        self._delay = delay
        self.calls: List[SearchCriteria] = []

    async def search(self, criteria: SearchCriteria) -> List[Flight]:
        self.calls.append(criteria)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return list(self._flights)


class RecordingHandler:
    """Handler de httpx.MockTransport que guarda as requisições recebidas."""

    def __init__(self, status_code: int = 200, body: str = "[]"):
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            content=self.body.encode(),
            headers={"Content-Type": "application/json"},
        )

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def criteria() -> SearchCriteria:
    """Critérios de busca LHR -> AMS para 2 passageiros."""
    return SearchCriteria(
        origin="LHR",
        destination="AMS",
        departure_date=date(2023, 1, 1),
        return_date=date(2023, 1, 2),
        passengers=2,
    )


@pytest.fixture
def make_flight() -> Callable[..., Flight]:
    def _make(fare: str, supplier: str = "CrazyAir", airline: str = "British Airways") -> Flight:
        return Flight(
            airline=airline,
            supplier=supplier,
            fare=Decimal(fare),
            departure_airport_code="LHR",
            destination_airport_code="AMS",
            departure_date=datetime(2023, 1, 1, 10, 0),
            arrival_date=datetime(2023, 1, 1, 12, 0),
        )

    return _make


@pytest.fixture
def crazyair_handler() -> RecordingHandler:
    return RecordingHandler(body=CRAZYAIR_BODY)


@pytest.fixture
def toughjet_handler() -> RecordingHandler:
    return RecordingHandler(body=TOUGHJET_BODY)


@pytest.fixture
def fake_supplier():
    """Classe FakeSupplier, para montar fornecedores em memória."""
    return FakeSupplier


@pytest.fixture
def recording_handler():
    """Classe RecordingHandler, para respostas HTTP customizadas."""
    return RecordingHandler
