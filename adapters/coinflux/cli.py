"""
CoinFlux API 명령행 도구

secrets.yaml을 로드해 API 메서드 하나를 호출하고 결과를 JSON으로 출력.

실행 방법:
    python -m adapters.coinflux getRate pair=BTCEUR
    python -m adapters.coinflux getWallet walletid=42 --secrets config/secrets.yaml
    python -m adapters.coinflux getRates --env test
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from adapters.coinflux.errors import CoinfluxError
from adapters.coinflux.operations import Operation, OPERATIONS
from adapters.coinflux.rest_client import CoinfluxRestClient
from core.config.loader import ClientOptions, SecretsLoadError, load_config
from core.logging import setup_logging
from core.types import Environment, Visibility

logger = logging.getLogger(__name__)


def parse_params(items: Sequence[str]) -> dict[str, str]:
    """key=value 인자 목록을 딕셔너리로 변환

    Raises:
        ValueError: '=' 가 없거나 키가 비어 있는 경우
    """
    params: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"파라미터는 key=value 형식이어야 합니다: {item!r}")
        params[key] = value
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coinflux",
        description="CoinFlux REST API 호출",
    )
    parser.add_argument(
        "operation",
        choices=[op.value for op in Operation],
        help="API 메서드 이름",
    )
    parser.add_argument(
        "params",
        nargs="*",
        metavar="key=value",
        help="요청 파라미터",
    )
    parser.add_argument(
        "--secrets",
        type=Path,
        default=None,
        help="secrets.yaml 경로 (기본: config/secrets.yaml)",
    )
    parser.add_argument(
        "--env",
        choices=[env.value for env in Environment],
        default=None,
        help="접속 환경 (public: secrets.yaml 없이 호출, private: 키 섹션 선택)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="DEBUG 로그 출력",
    )
    return parser


def create_client(args: argparse.Namespace) -> CoinfluxRestClient:
    """인자에 맞는 클라이언트 생성

    public 메서드에 --env를 지정하면 secrets.yaml 없이 생성.
    private 메서드의 --env는 secrets.yaml에서 사용할 키 섹션을 선택.
    """
    spec = OPERATIONS[Operation(args.operation)]
    if args.env is not None and spec.visibility == Visibility.PUBLIC:
        return CoinfluxRestClient(options=ClientOptions(env=Environment(args.env)))

    return CoinfluxRestClient.from_config(load_config(args.secrets, env=args.env))


async def run(args: argparse.Namespace) -> int:
    """API 호출 후 결과 출력

    Returns:
        종료 코드 (성공 0, 실패 1)
    """
    try:
        params = parse_params(args.params)
        client = create_client(args)
    except (ValueError, SecretsLoadError) as e:
        print(str(e), file=sys.stderr)
        return 2

    async with client:
        try:
            result: Any = await client.api(args.operation, params)
        except CoinfluxError as e:
            logger.error(f"{args.operation} 실패: {e}")
            print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
            return 1

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        "coinflux",
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    return asyncio.run(run(args))
