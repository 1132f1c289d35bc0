"""
Factory para criar instâncias configuradas dos serviços
"""
from typing import List, Optional

from ..application.interfaces import FlightSupplierInterface
from ..application.services import FlightSearchService
from .config import Config
from .suppliers.crazyair import CrazyAirSupplier
from .suppliers.toughjet import ToughJetSupplier


class FlightSearchServiceFactory:
    """Factory para criar o serviço de busca configurado"""

    @staticmethod
    def create(config: Optional[Config] = None) -> FlightSearchService:
        """Cria uma instância completa do serviço de busca"""
        if config is None:
            config = Config()

        suppliers = FlightSearchServiceFactory._create_suppliers(config)

        return FlightSearchService(
            suppliers=suppliers,
            supplier_timeout=config.SUPPLIER_TIMEOUT or None,
        )

    @staticmethod
    def _create_suppliers(config: Config) -> List[FlightSupplierInterface]:
        """Cria lista de fornecedores configurados, na ordem de merge"""
        suppliers: List[FlightSupplierInterface] = []

        if config.is_crazyair_configured():
            suppliers.append(CrazyAirSupplier(
                base_url=config.CRAZYAIR_URL,
                endpoint=config.CRAZYAIR_FLIGHTS_ENDPOINT,
                timeout=config.REQUEST_TIMEOUT,
            ))

        if config.is_toughjet_configured():
            suppliers.append(ToughJetSupplier(
                base_url=config.TOUGHJET_URL,
                endpoint=config.TOUGHJET_FLIGHTS_ENDPOINT,
                timeout=config.REQUEST_TIMEOUT,
            ))

        return suppliers
