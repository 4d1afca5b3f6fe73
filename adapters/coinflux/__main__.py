"""
CoinFlux CLI 진입점

실행 방법:
    python -m adapters.coinflux getRates
"""

import sys

from adapters.coinflux.cli import main

if __name__ == "__main__":
    sys.exit(main())
