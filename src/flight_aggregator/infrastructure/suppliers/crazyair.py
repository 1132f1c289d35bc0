"""
Fornecedor CrazyAir
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ...domain.models import AirportCode, Flight, SearchCriteria, round_fare
from .base import BaseFlightSupplier

CRAZYAIR_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class CrazyAirRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin: str
    destination: str
    departure_date: date
    return_date: Optional[date] = None
    passenger_count: int


class CrazyAirFlight(BaseModel):
    """Registro de voo no formato CrazyAir (preço final, datas locais)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    airline: str
    price: Decimal
    cabinclass: Optional[str] = None
    departure_airport_code: str
    destination_airport_code: str
    departure_date: datetime
    arrival_date: datetime

    @field_validator("departure_date", "arrival_date", mode="before")
    @classmethod
    def _parse_local_timestamp(cls, value: Any) -> datetime:
        # Datas locais sem fuso; offsets e epoch não fazem parte do contrato
        if not isinstance(value, str):
            raise ValueError(f"expected a {CRAZYAIR_DATE_FORMAT} string, got: {value!r}")
        return datetime.strptime(value, CRAZYAIR_DATE_FORMAT)


class CrazyAirSupplier(BaseFlightSupplier):
    """Fornecedor de voos via CrazyAir API"""

    name = "CrazyAir"
    response_model = CrazyAirFlight

    def _build_payload(self, criteria: SearchCriteria) -> Dict[str, Any]:
        request = CrazyAirRequest(
            origin=criteria.origin.code,
            destination=criteria.destination.code,
            departure_date=criteria.departure_date,
            return_date=criteria.return_date,
            passenger_count=criteria.passengers,
        )
        return request.model_dump(mode="json", by_alias=True)

    def _to_flight(self, record: CrazyAirFlight) -> Flight:
        return Flight(
            airline=record.airline,
            supplier=self.name,
            fare=round_fare(record.price),
            departure_airport_code=AirportCode.create(record.departure_airport_code),
            destination_airport_code=AirportCode.create(record.destination_airport_code),
            departure_date=record.departure_date,
            arrival_date=record.arrival_date,
        )
