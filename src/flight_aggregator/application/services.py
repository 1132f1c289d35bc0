"""
Application Services - Casos de uso principais
"""
import asyncio
import logging
from typing import Any, Iterable, List, Optional, Tuple

from ..domain.exceptions import InvalidSearchCriteria
from ..domain.models import AirportCode, Flight, SearchCriteria
from .interfaces import FlightSupplierInterface

logger = logging.getLogger(__name__)

MIN_PASSENGERS = 1
MAX_PASSENGERS = 4


def _code_of(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, AirportCode):
        return value.code
    return str(value)


class FlightSearchService:
    """Serviço principal de busca de voos

    Consulta todos os fornecedores registrados em paralelo. A falha de um
    fornecedor vira uma contribuição vazia e nunca interrompe a busca.
    """

    def __init__(
        self,
        suppliers: Iterable[FlightSupplierInterface],
        supplier_timeout: Optional[float] = None,
    ):
        self._suppliers: Tuple[FlightSupplierInterface, ...] = tuple(suppliers)
        self._supplier_timeout = supplier_timeout

    @property
    def suppliers(self) -> Tuple[FlightSupplierInterface, ...]:
        return self._suppliers

    async def search(self, criteria: SearchCriteria) -> List[Flight]:
        """Valida os critérios, busca em todos os fornecedores e ordena por tarifa"""
        self._validate_criteria(criteria)

        # Executa todos os fornecedores em paralelo
        tasks = [self._search_supplier(supplier, criteria) for supplier in self._suppliers]
        results = await asyncio.gather(*tasks)

        all_flights: List[Flight] = []
        for flights in results:
            all_flights.extend(flights)

        return self._sort_by_fare(all_flights)

    def _validate_criteria(self, criteria: SearchCriteria) -> None:
        """Regras de negócio aplicadas antes do fan-out"""
        if criteria.passengers < MIN_PASSENGERS or criteria.passengers > MAX_PASSENGERS:
            raise InvalidSearchCriteria(
                f"Number of passengers must be between {MIN_PASSENGERS} and {MAX_PASSENGERS}"
            )

        origin = _code_of(criteria.origin)
        destination = _code_of(criteria.destination)

        if not origin.strip():
            raise InvalidSearchCriteria("Origin airport code cannot be empty")

        if not destination.strip():
            raise InvalidSearchCriteria("Destination airport code cannot be empty")

        if origin == destination:
            raise InvalidSearchCriteria("Origin and destination cannot be the same")

    async def _search_supplier(
        self, supplier: FlightSupplierInterface, criteria: SearchCriteria
    ) -> List[Flight]:
        """Busca em um fornecedor, convertendo qualquer falha em lista vazia"""
        name = getattr(supplier, "name", type(supplier).__name__)
        try:
            if self._supplier_timeout:
                try:
                    flights = await asyncio.wait_for(supplier.search(criteria), self._supplier_timeout)
                except asyncio.TimeoutError:
                    logger.error("Supplier %s timed out after %ss", name, self._supplier_timeout)
                    return []
            else:
                flights = await supplier.search(criteria)
            return list(flights)
        except Exception as e:
            logger.exception("Error searching flights from %s: %s", name, e)
            return []

    def _sort_by_fare(self, flights: List[Flight]) -> List[Flight]:
        # sorted() é estável: empates mantêm a ordem dos fornecedores
        return sorted(flights, key=lambda flight: flight.fare)
