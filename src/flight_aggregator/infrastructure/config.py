"""
Configuração da aplicação
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuração centralizada"""

    # Fornecedores
    CRAZYAIR_URL = os.getenv("CRAZYAIR_URL", "")
    CRAZYAIR_FLIGHTS_ENDPOINT = os.getenv("CRAZYAIR_FLIGHTS_ENDPOINT", "/flights")
    TOUGHJET_URL = os.getenv("TOUGHJET_URL", "")
    TOUGHJET_FLIGHTS_ENDPOINT = os.getenv("TOUGHJET_FLIGHTS_ENDPOINT", "/flights")

    # Limites
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
    SUPPLIER_TIMEOUT = float(os.getenv("SUPPLIER_TIMEOUT", "15"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def is_crazyair_configured(cls) -> bool:
        return bool(cls.CRAZYAIR_URL)

    @classmethod
    def is_toughjet_configured(cls) -> bool:
        return bool(cls.TOUGHJET_URL)
