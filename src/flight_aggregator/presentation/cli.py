"""
Interface de linha de comando
"""
import argparse
import asyncio
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..application.services import FlightSearchService
from ..domain.exceptions import FlightAggregatorError
from ..domain.models import Flight, SearchCriteria
from ..infrastructure.config import Config
from ..infrastructure.factory import FlightSearchServiceFactory
from ..infrastructure.logging_config import setup_logging


class FlightAggregatorCLI:
    """Interface CLI para o agregador de voos"""

    def __init__(
        self,
        search_service: Optional[FlightSearchService] = None,
        console: Optional[Console] = None,
    ):
        self.console = console or Console()
        self.search_service = search_service or FlightSearchServiceFactory.create()

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Executa a interface CLI e retorna o código de saída"""
        args = self._parse_arguments(argv)

        try:
            criteria = self._build_search_criteria(args)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.console,
                transient=True,
            ) as progress:
                task = progress.add_task("Buscando ofertas nos fornecedores...", total=None)
                flights = asyncio.run(self.search_service.search(criteria))
                progress.update(task, description="Busca concluída!")

        except FlightAggregatorError as e:
            self.console.print(Panel.fit(f"[red]{e}[/red]", title="Busca inválida", border_style="red"))
            return 2

        self._display_results(flights, args.limit, criteria)
        return 0

    def _parse_arguments(self, argv: Optional[List[str]]) -> argparse.Namespace:
        """Configura e processa argumentos da linha de comando"""
        parser = argparse.ArgumentParser(
            prog="flight-aggregator",
            description="Flight Aggregator - Busca de voos em múltiplos fornecedores",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Exemplos de uso:
  flight-aggregator --origin LHR --destination AMS --depart 2025-02-15
  flight-aggregator --origin LHR --destination AMS --depart 2025-02-15 --return 2025-02-20 --passengers 2
            """
        )

        parser.add_argument("--origin", required=True,
                            help="Código IATA origem (ex: LHR)")
        parser.add_argument("--destination", required=True,
                            help="Código IATA destino (ex: AMS)")
        parser.add_argument("--depart", required=True, type=date.fromisoformat,
                            help="Data partida YYYY-MM-DD")
        parser.add_argument("--return", dest="return_date", type=date.fromisoformat,
                            help="Data retorno YYYY-MM-DD (para ida e volta)")
        parser.add_argument("--passengers", type=int, default=1,
                            help="Número de passageiros, 1 a 4 (padrão: 1)")
        parser.add_argument("--limit", type=int, default=20,
                            help="Limite de ofertas exibidas (padrão: 20)")

        return parser.parse_args(argv)

    def _build_search_criteria(self, args: argparse.Namespace) -> SearchCriteria:
        """Constrói critérios de busca a partir dos argumentos"""
        return SearchCriteria(
            origin=args.origin,
            destination=args.destination,
            departure_date=args.depart,
            return_date=args.return_date,
            passengers=args.passengers,
        )

    def _display_results(self, flights: List[Flight], limit: int, criteria: SearchCriteria) -> None:
        """Exibe resultados da busca"""
        if not flights:
            self.console.print(
                Panel.fit(
                    "[yellow]Nenhuma oferta encontrada.[/yellow]\n"
                    "Verifique se as URLs dos fornecedores estão configuradas no .env.",
                    title="Sem Resultados",
                    border_style="yellow"
                )
            )
            return

        limited = flights[:limit]
        trip = "ida e volta" if criteria.is_round_trip() else "somente ida"

        table = Table(
            show_lines=True,
            title=f"🛫 Ofertas Encontradas ({len(limited)} de {len(flights)}) - {trip}",
        )
        table.add_column("#", justify="right", width=3)
        table.add_column("Fornecedor", style="bold cyan")
        table.add_column("Companhia")
        table.add_column("Tarifa", style="bold green", justify="right")
        table.add_column("Rota", style="yellow")
        table.add_column("Partida")
        table.add_column("Chegada")

        for index, flight in enumerate(limited, start=1):
            table.add_row(
                str(index),
                flight.supplier,
                flight.airline,
                f"{flight.fare:.2f}",
                flight.route_summary,
                flight.departure_date.strftime("%Y-%m-%d %H:%M"),
                flight.arrival_date.strftime("%Y-%m-%d %H:%M"),
            )

        self.console.print(table)


def main():
    """Função principal"""
    setup_logging(Config.LOG_LEVEL, rich_output=True)
    cli = FlightAggregatorCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
