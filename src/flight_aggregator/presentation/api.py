"""
API HTTP do agregador de voos
"""
import argparse
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..application.services import FlightSearchService
from ..domain.exceptions import FlightAggregatorError
from ..infrastructure.config import Config
from ..infrastructure.factory import FlightSearchServiceFactory
from ..infrastructure.logging_config import setup_logging
from .schemas import ErrorResponse, FlightResponse, FlightSearchRequest

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configura o logging na subida do servidor"""
    setup_logging(Config.LOG_LEVEL)
    yield


app = FastAPI(
    title="Flight Aggregator API",
    description="Aggregates flight offers from multiple suppliers into one fare-sorted list",
    version="1.0.0",
    lifespan=lifespan,
)


@lru_cache()
def get_search_service() -> FlightSearchService:
    """Serviço de busca compartilhado pelo processo"""
    return FlightSearchServiceFactory.create()


def _error_response(status_code: int, error: str, message: str, request: Request) -> JSONResponse:
    body = ErrorResponse(status=status_code, error=error, message=message, path=request.url.path)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _field_name(loc) -> str:
    # loc vem como ("body", "origin"); o prefixo "body" não interessa ao cliente
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = ", ".join(f"{_field_name(err['loc'])}: {err['msg']}" for err in exc.errors())
    logger.warning("Validation error: %s", errors)
    return _error_response(400, "Bad Request", errors, request)


@app.exception_handler(FlightAggregatorError)
async def domain_exception_handler(request: Request, exc: FlightAggregatorError):
    logger.warning("Invalid search request: %s", exc)
    return _error_response(400, "Bad Request", str(exc) or "Invalid argument", request)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unexpected error", exc_info=exc)
    return _error_response(500, "Internal Server Error", "An unexpected error occurred", request)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "flight-aggregator"}


@app.post("/flights/search", response_model=List[FlightResponse])
async def search_flights(
    search_request: FlightSearchRequest,
    service: FlightSearchService = Depends(get_search_service),
):
    """Busca voos em todos os fornecedores, ordenados por tarifa."""
    logger.debug(
        "Searching flights from %s to %s", search_request.origin, search_request.destination
    )
    flights = await service.search(search_request.to_criteria())
    return [FlightResponse.from_flight(flight) for flight in flights]


def run(argv: Optional[List[str]] = None) -> None:
    """Executa a API com uvicorn"""
    parser = argparse.ArgumentParser(description="Flight Aggregator HTTP API")
    parser.add_argument("--host", default="0.0.0.0", help="Interface (padrão: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Porta (padrão: 8000)")
    parser.add_argument("--reload", action="store_true", help="Recarrega ao alterar o código")
    args = parser.parse_args(argv)

    uvicorn.run(
        "flight_aggregator.presentation.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
