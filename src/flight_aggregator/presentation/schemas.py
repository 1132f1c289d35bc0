"""
DTOs da API HTTP
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..domain.models import Flight, SearchCriteria

IATA_PATTERN = r"^[A-Z]{3}$"


class FlightSearchRequest(BaseModel):
    """Corpo de POST /flights/search"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin: str = Field(..., pattern=IATA_PATTERN, description="IATA origem")
    destination: str = Field(..., pattern=IATA_PATTERN, description="IATA destino")
    departure_date: date = Field(..., description="Data de partida (YYYY-MM-DD)")
    return_date: Optional[date] = Field(None, description="Data de retorno (YYYY-MM-DD)")
    number_of_passengers: int = Field(..., ge=1, le=4, description="Número de passageiros")

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(
            origin=self.origin,
            destination=self.destination,
            departure_date=self.departure_date,
            return_date=self.return_date,
            passengers=self.number_of_passengers,
        )


class FlightResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    airline: str
    supplier: str
    fare: Decimal
    departure_airport_code: str
    destination_airport_code: str
    departure_date: datetime
    arrival_date: datetime

    @field_serializer("fare")
    def _serialize_fare(self, fare: Decimal) -> str:
        return f"{fare:.2f}"

    @field_serializer("departure_date", "arrival_date")
    def _serialize_datetime(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%dT%H:%M:%S")

    @classmethod
    def from_flight(cls, flight: Flight) -> "FlightResponse":
        return cls(
            airline=flight.airline,
            supplier=flight.supplier,
            fare=flight.fare,
            departure_airport_code=flight.departure_airport_code.code,
            destination_airport_code=flight.destination_airport_code.code,
            departure_date=flight.departure_date,
            arrival_date=flight.arrival_date,
        )


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    path: str
