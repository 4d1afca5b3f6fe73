"""
CoinFlux 어댑터

CoinFlux REST API 연동을 담당.
public 시세 조회와 private 계정/거래 API 지원.
"""

from adapters.coinflux.rest_client import CoinfluxRestClient, PreparedRequest
from adapters.coinflux.operations import (
    OPERATIONS,
    Operation,
    OperationSpec,
    get_operation,
    resolve_path,
    validate_params,
)
from adapters.coinflux.signer import build_message, sign
from adapters.coinflux.errors import (
    ApiError,
    CoinfluxError,
    CoinfluxTimeoutError,
    HttpError,
    InvalidCredentialError,
    InvalidOperationError,
    InvalidParameterError,
    MissingParameterError,
    NetworkError,
)

__all__ = [
    "CoinfluxRestClient",
    "PreparedRequest",
    # Operations
    "OPERATIONS",
    "Operation",
    "OperationSpec",
    "get_operation",
    "resolve_path",
    "validate_params",
    # Signing
    "build_message",
    "sign",
    # Errors
    "ApiError",
    "CoinfluxError",
    "CoinfluxTimeoutError",
    "HttpError",
    "InvalidCredentialError",
    "InvalidOperationError",
    "InvalidParameterError",
    "MissingParameterError",
    "NetworkError",
]
