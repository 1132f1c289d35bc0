"""
Domain Models - Entidades de negócio puras
"""
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime, field_validator, model_validator

from .exceptions import InvalidAirportCode, InvalidSearchCriteria

FARE_PRECISION = Decimal("0.01")


def round_fare(value: Decimal) -> Decimal:
    """Arredonda a tarifa para 2 casas decimais (half-up)"""
    return value.quantize(FARE_PRECISION, rounding=ROUND_HALF_UP)


class AirportCode(BaseModel):
    """Código IATA de aeroporto, sempre com 3 letras maiúsculas"""
    model_config = ConfigDict(frozen=True)

    code: str

    @field_validator("code", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidAirportCode(f"Airport code must be a string, got: {value!r}")

        trimmed = value.strip()
        if not trimmed:
            raise InvalidAirportCode("Airport code cannot be blank")
        if len(trimmed) != 3:
            raise InvalidAirportCode(f"Airport code must be exactly 3 characters, got: {trimmed}")
        if not (trimmed.isascii() and trimmed.isalpha()):
            raise InvalidAirportCode(f"Airport code must contain only letters, got: {trimmed}")

        return trimmed.upper()

    @classmethod
    def create(cls, raw: str) -> "AirportCode":
        """Valida e normaliza um código vindo de fora do sistema"""
        return cls(code=raw)

    def __str__(self) -> str:
        return self.code

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AirportCode):
            return NotImplemented
        return self.code < other.code

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AirportCode):
            return NotImplemented
        return self.code <= other.code

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AirportCode):
            return NotImplemented
        return self.code > other.code

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AirportCode):
            return NotImplemented
        return self.code >= other.code


def _as_airport_code(value: Any) -> Any:
    if isinstance(value, str):
        return AirportCode.create(value)
    return value


class SearchCriteria(BaseModel):
    """Critérios de busca

    Origem e destino iguais são rejeitados na construção. O limite de
    passageiros é regra do caso de uso e fica em FlightSearchService.
    """
    model_config = ConfigDict(frozen=True)

    origin: AirportCode = Field(..., description="IATA origem")
    destination: AirportCode = Field(..., description="IATA destino")
    departure_date: date = Field(..., description="Data de partida")
    return_date: Optional[date] = Field(None, description="Data de retorno")
    passengers: int = Field(default=1, description="Número de passageiros")

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _coerce_codes(cls, value: Any) -> Any:
        return _as_airport_code(value)

    @model_validator(mode="after")
    def _check_route(self) -> "SearchCriteria":
        if self.origin == self.destination:
            raise InvalidSearchCriteria("Origin and destination cannot be the same")
        return self

    def is_round_trip(self) -> bool:
        """Verifica se é ida e volta"""
        return self.return_date is not None


class Flight(BaseModel):
    """Oferta de voo normalizada, independente do fornecedor"""
    model_config = ConfigDict(frozen=True)

    airline: str
    supplier: str
    fare: Decimal
    departure_airport_code: AirportCode
    destination_airport_code: AirportCode
    departure_date: NaiveDatetime
    arrival_date: NaiveDatetime

    @field_validator("departure_airport_code", "destination_airport_code", mode="before")
    @classmethod
    def _coerce_codes(cls, value: Any) -> Any:
        return _as_airport_code(value)

    @field_validator("fare")
    @classmethod
    def _round_fare(cls, value: Decimal) -> Decimal:
        return round_fare(value)

    @property
    def route_summary(self) -> str:
        """Resumo da rota"""
        return f"{self.departure_airport_code} → {self.destination_airport_code}"
