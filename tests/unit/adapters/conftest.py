"""
어댑터 테스트 픽스처

CoinFlux 클라이언트 / HTTP 응답 Mock 제공.
"""

import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from adapters.coinflux.rest_client import CoinfluxRestClient
from core.config.loader import ClientOptions
from core.types import Environment
from core.utils.nonce import NonceGenerator


class FixedClock:
    """호출마다 1µs씩 증가하는 테스트용 시계"""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        value = self.now
        self.now += 1
        return value


@pytest.fixture
def api_secret() -> str:
    """테스트용 16진수 시크릿"""
    return "0123456789abcdef0123456789abcdef"


@pytest.fixture
def fixed_nonces() -> NonceGenerator:
    """1000000부터 1씩 증가하는 nonce 생성기"""
    return NonceGenerator(clock=FixedClock())


@pytest.fixture
def client(api_secret: str, fixed_nonces: NonceGenerator) -> CoinfluxRestClient:
    """test 환경 CoinFlux 클라이언트"""
    return CoinfluxRestClient(
        api_key="test_api_key",
        api_secret=api_secret,
        options=ClientOptions(env=Environment.TEST),
        nonce_generator=fixed_nonces,
    )


@pytest.fixture
def public_client() -> CoinfluxRestClient:
    """자격증명 없는 public 전용 클라이언트"""
    return CoinfluxRestClient()


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """httpx.Response Mock 생성 함수"""

    def _make(
        status_code: int = 200,
        body: Any = None,
        reason_phrase: str = "OK",
        text: str | None = None,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.reason_phrase = reason_phrase
        response.headers = {}

        if text is not None:
            response.content = text.encode("utf-8")
            response.text = text
            response.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
        elif body is None:
            response.content = b""
            response.text = ""
            response.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
        else:
            response.text = json.dumps(body)
            response.content = response.text.encode("utf-8")
            response.json.return_value = body

        return response

    return _make
