"""
CoinFlux 요청 서명

서명 = hex(HMAC-SHA512(hex_decode(secret), path + SHA256(nonce + message)))

message는 요청 파라미터를 키 오름차순(바이트 순)으로 정렬한
key=value&... 문자열. 서버가 같은 순서로 재계산하므로 정렬 순서가 다르면
인증 실패.
"""

import hashlib
import hmac
import re
from decimal import Decimal
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from adapters.coinflux.errors import InvalidCredentialError, InvalidParameterError

_HEX = re.compile(r"[0-9a-fA-F]+")


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        # 지수 표기(1E+2) 방지
        return format(value, "f")
    if isinstance(value, float):
        # repr 기반 표기(1e-07)는 서버 재계산과 달라질 수 있음
        raise InvalidParameterError(
            f"float is not allowed for signed parameters, use Decimal or str: {value!r}"
        )
    return str(value)


def build_message(params: Mapping[str, Any] | None) -> str:
    """정규화된 서명 대상 문자열 생성

    키/값은 RFC 3986 방식으로 퍼센트 인코딩 (공백 → %20).
    값이 None인 항목은 제외. 금액은 Decimal 또는 str로 전달.

    Args:
        params: 요청 파라미터

    Returns:
        key=value&... 문자열 (빈 매핑이면 "")

    Raises:
        InvalidParameterError: float 값이 포함된 경우

    Example:
        >>> build_message({"b": 2, "a": 1})
        'a=1&b=2'
    """
    if not params:
        return ""

    items = sorted(
        ((str(key), _to_str(value)) for key, value in params.items() if value is not None),
        key=lambda item: item[0].encode("utf-8"),
    )
    return urlencode(items, quote_via=quote)


def decode_secret(secret: str) -> bytes:
    """16진수 API 시크릿을 바이트로 변환

    Raises:
        InvalidCredentialError: 비어 있거나 16진수가 아닌 경우
    """
    if not isinstance(secret, str) or not secret:
        raise InvalidCredentialError("API secret is empty")

    # bytes.fromhex는 공백을 허용하므로 먼저 형식 검사
    if len(secret) % 2 or not _HEX.fullmatch(secret):
        raise InvalidCredentialError("API secret must be a hexadecimal string")

    return bytes.fromhex(secret)


def sign(path: str, message: str, secret: str, nonce: int) -> str:
    """요청 서명 생성

    Args:
        path: 요청 경로 (예: /v0/private/ledger)
        message: build_message() 결과
        secret: 16진수 API 시크릿
        nonce: 요청 nonce

    Returns:
        소문자 16진수 서명 (128자)

    Raises:
        InvalidCredentialError: 시크릿 형식 오류
    """
    key = decode_secret(secret)
    inner = hashlib.sha256(f"{nonce}{message}".encode("utf-8")).digest()
    return hmac.new(key, path.encode("utf-8") + inner, hashlib.sha512).hexdigest()
