"""
Fornecedor ToughJet
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.models import AirportCode, Flight, SearchCriteria, round_fare
from .base import BaseFlightSupplier


class ToughJetRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    outbound_date: date
    inbound_date: Optional[date] = None
    number_of_adults: int


class ToughJetFlight(BaseModel):
    """Registro de voo no formato ToughJet (preço composto, instantes UTC)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    carrier: str
    base_price: Decimal
    tax: Decimal
    discount: Decimal = Field(..., description="Percentual inteiro (5 = 5%)")
    departure_airport_name: str
    arrival_airport_name: str
    outbound_date_time: datetime
    inbound_date_time: datetime


def compute_fare(base_price: Decimal, tax: Decimal, discount: Decimal) -> Decimal:
    """Tarifa final: desconto percentual aplicado apenas ao preço base"""
    discount_amount = base_price * discount / Decimal(100)
    return round_fare(base_price + tax - discount_amount)


def to_utc_wall_clock(value: datetime) -> datetime:
    """Converte um instante para datetime ingênuo no horário UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ToughJetSupplier(BaseFlightSupplier):
    """Fornecedor de voos via ToughJet API"""

    name = "ToughJet"
    response_model = ToughJetFlight

    def _build_payload(self, criteria: SearchCriteria) -> Dict[str, Any]:
        request = ToughJetRequest(
            from_=criteria.origin.code,
            to=criteria.destination.code,
            outbound_date=criteria.departure_date,
            inbound_date=criteria.return_date,
            number_of_adults=criteria.passengers,
        )
        return request.model_dump(mode="json", by_alias=True)

    def _to_flight(self, record: ToughJetFlight) -> Flight:
        return Flight(
            airline=record.carrier,
            supplier=self.name,
            fare=compute_fare(record.base_price, record.tax, record.discount),
            departure_airport_code=AirportCode.create(record.departure_airport_name),
            destination_airport_code=AirportCode.create(record.arrival_airport_name),
            departure_date=to_utc_wall_clock(record.outbound_date_time),
            arrival_date=to_utc_wall_clock(record.inbound_date_time),
        )
