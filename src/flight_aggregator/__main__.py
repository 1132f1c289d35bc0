"""
Ponto de entrada principal do Flight Aggregator
"""
from .presentation.cli import main

if __name__ == "__main__":
    main()
