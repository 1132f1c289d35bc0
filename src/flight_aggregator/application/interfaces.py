"""
Interfaces/Contratos para Application Layer
"""
from typing import List, Protocol

from ..domain.models import Flight, SearchCriteria


class FlightSupplierInterface(Protocol):
    """Interface para fornecedores de voo"""
    name: str

    async def search(self, criteria: SearchCriteria) -> List[Flight]:
        """Busca e normaliza ofertas do fornecedor; nunca propaga falhas"""
        ...
