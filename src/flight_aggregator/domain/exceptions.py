"""
Domain Exceptions - Taxonomia de erros do agregador
"""


class FlightAggregatorError(Exception):
    """Erro base do agregador de voos"""


class InvalidAirportCode(FlightAggregatorError):
    """Código IATA inválido"""


class InvalidSearchCriteria(FlightAggregatorError):
    """Critérios de busca rejeitados pela regra de negócio"""


class SupplierUnavailable(FlightAggregatorError):
    """Falha de transporte, HTTP ou parsing em um fornecedor"""

    def __init__(self, supplier: str, reason: str):
        super().__init__(f"{supplier} unavailable: {reason}")
        self.supplier = supplier
        self.reason = reason
