"""
Base Supplier - Template Method Pattern
"""
import json
import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ...domain.exceptions import InvalidAirportCode, SupplierUnavailable
from ...domain.models import Flight, SearchCriteria
from ..config import Config

logger = logging.getLogger(__name__)


class BaseFlightSupplier(ABC):
    """Classe base para fornecedores de voo usando Template Method Pattern

    Cada fornecedor define o payload de busca, o formato de resposta
    (``response_model``) e a normalização para ``Flight``. Qualquer falha
    resulta em lista vazia.
    """

    name: str = "base"
    response_model: Type[BaseModel]

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/flights",
        timeout: float = Config.REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport
        self._records = TypeAdapter(List[self.response_model])

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._endpoint}"

    async def search(self, criteria: SearchCriteria) -> List[Flight]:
        """Template method para busca de voos"""
        logger.info(
            "Searching flights from %s: origin=%s, destination=%s, departureDate=%s, passengers=%s",
            self.name,
            criteria.origin,
            criteria.destination,
            criteria.departure_date,
            criteria.passengers,
        )

        try:
            payload = self._build_payload(criteria)
            raw_data = await self._make_request(payload)
            return self._parse_response(raw_data)
        except SupplierUnavailable as e:
            logger.error("Error searching flights from %s: %s", self.name, e.reason)
            return []
        except Exception as e:
            logger.exception("Unexpected error searching flights from %s: %s", self.name, e)
            return []

    @abstractmethod
    def _build_payload(self, criteria: SearchCriteria) -> Dict[str, Any]:
        """Constrói o corpo JSON específico do fornecedor"""

    @abstractmethod
    def _to_flight(self, record: Any) -> Flight:
        """Normaliza um registro do fornecedor para o modelo canônico"""

    async def _make_request(self, payload: Dict[str, Any]) -> Any:
        """Faz a requisição HTTP"""
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(self._endpoint, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise SupplierUnavailable(
                    self.name, f"HTTP {e.response.status_code} from {e.request.url}"
                ) from e
            except httpx.HTTPError as e:
                raise SupplierUnavailable(self.name, f"{type(e).__name__}: {e}") from e

        try:
            # Decimal preserva os valores monetários exatamente como enviados
            return json.loads(response.text, parse_float=Decimal)
        except ValueError as e:
            raise SupplierUnavailable(self.name, f"invalid JSON body: {e}") from e

    def _parse_response(self, raw_data: Any) -> List[Flight]:
        """Converte resposta da API em voos"""
        try:
            records = self._records.validate_python(raw_data)
            return [self._to_flight(record) for record in records]
        except ValidationError as e:
            raise SupplierUnavailable(
                self.name, f"unexpected response: {e.error_count()} validation error(s)"
            ) from e
        except InvalidAirportCode as e:
            raise SupplierUnavailable(self.name, str(e)) from e
