"""
CoinFlux API 메서드 카탈로그

메서드 이름 → URL 템플릿, HTTP 메서드, 공개 범위, 필수 파라미터 매핑.
경로 파라미터 치환과 요청 전 파라미터 검증 담당.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from adapters.coinflux.errors import (
    InvalidOperationError,
    InvalidParameterError,
    MissingParameterError,
)
from core.types import HttpMethod, Visibility

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Operation(str, Enum):
    """API 메서드 (값은 API 문서의 메서드 이름)"""

    GET_RATES = "getRates"
    GET_RATE = "getRate"
    GET_FLUXES = "getFluxes"
    GET_FLUX = "getFlux"
    GET_FLUX_ADDRESSES = "getFluxAddresses"
    GET_FLUX_OF_ADDRESS = "getFluxOfAddress"
    NEW_SELL_ADDRESS = "newSellAddress"
    GET_WALLETS = "getWallets"
    GET_WALLET = "getWallet"
    GET_WALLET_HISTORY = "getWalletHistory"
    GET_WALLET_HISTORY_TX = "getWalletHistoryTx"
    GET_LEDGER = "getLedger"
    GET_LEDGER_TX = "getLedgerTx"
    GET_BANK_ACCOUNTS = "getBankAccounts"
    GET_BANK_ACCOUNT = "getBankAccount"
    BUY_TO_ADDRESS = "buyToAddress"


@dataclass(frozen=True)
class OperationSpec:
    """API 메서드 정의 (불변)

    Args:
        template: /{version} 이후 경로 템플릿 ({name} 플레이스홀더 포함)
        method: HTTP 메서드
        visibility: public / private
        required: 필수 파라미터 이름
        max_params: 허용 파라미터 개수 상한 (None이면 제한 없음)
    """

    template: str
    method: HttpMethod
    visibility: Visibility
    required: tuple[str, ...] = ()
    max_params: int | None = None

    @property
    def placeholders(self) -> tuple[str, ...]:
        """템플릿에 포함된 경로 파라미터 이름"""
        return tuple(_PLACEHOLDER.findall(self.template))

    @property
    def is_private(self) -> bool:
        return self.visibility == Visibility.PRIVATE


_GET = HttpMethod.GET
_POST = HttpMethod.POST
_PUBLIC = Visibility.PUBLIC
_PRIVATE = Visibility.PRIVATE

OPERATIONS: dict[Operation, OperationSpec] = {
    # 시세
    Operation.GET_RATES: OperationSpec("/public/rates", _GET, _PUBLIC),
    Operation.GET_RATE: OperationSpec("/public/rates/{pair}", _GET, _PUBLIC, ("pair",)),
    # Flux / 입금 주소
    Operation.GET_FLUXES: OperationSpec("/private/fluxes", _GET, _PRIVATE),
    Operation.GET_FLUX: OperationSpec(
        "/private/fluxes/{fluxid}", _GET, _PRIVATE, ("fluxid",)
    ),
    Operation.GET_FLUX_ADDRESSES: OperationSpec(
        "/private/fluxes/{fluxid}/addresses", _GET, _PRIVATE, ("fluxid",)
    ),
    Operation.GET_FLUX_OF_ADDRESS: OperationSpec(
        "/private/fluxes/addresses/{address}", _GET, _PRIVATE, ("address",)
    ),
    Operation.NEW_SELL_ADDRESS: OperationSpec(
        "/private/fluxes/addresses", _POST, _PRIVATE, ("fluxid",), max_params=1
    ),
    # 지갑
    Operation.GET_WALLETS: OperationSpec("/private/wallets", _GET, _PRIVATE),
    Operation.GET_WALLET: OperationSpec(
        "/private/wallets/{walletid}", _GET, _PRIVATE, ("walletid",)
    ),
    Operation.GET_WALLET_HISTORY: OperationSpec(
        "/private/wallets/{walletid}/history", _GET, _PRIVATE, ("walletid",)
    ),
    Operation.GET_WALLET_HISTORY_TX: OperationSpec(
        "/private/wallets/{walletid}/history/{historyid}",
        _GET,
        _PRIVATE,
        ("walletid", "historyid"),
    ),
    # 원장
    Operation.GET_LEDGER: OperationSpec("/private/ledger", _GET, _PRIVATE),
    Operation.GET_LEDGER_TX: OperationSpec(
        "/private/ledger/{ledgerid}", _GET, _PRIVATE, ("ledgerid",)
    ),
    # 은행 계좌
    Operation.GET_BANK_ACCOUNTS: OperationSpec("/private/bankaccounts", _GET, _PRIVATE),
    Operation.GET_BANK_ACCOUNT: OperationSpec(
        "/private/bankaccounts/{accountid}", _GET, _PRIVATE, ("accountid",)
    ),
    # 매수
    Operation.BUY_TO_ADDRESS: OperationSpec(
        "/private/trade/buy/toAddress",
        _POST,
        _PRIVATE,
        ("walletid", "address", "cost", "ccy1"),
        max_params=5,
    ),
}


def get_operation(name: Operation | str) -> tuple[Operation, OperationSpec]:
    """메서드 이름으로 카탈로그 조회

    Args:
        name: Operation 또는 메서드 이름 문자열 (예: "getRate")

    Returns:
        (Operation, OperationSpec)

    Raises:
        InvalidOperationError: 카탈로그에 없는 이름
    """
    try:
        operation = Operation(name)
    except ValueError:
        raise InvalidOperationError(name) from None
    return operation, OPERATIONS[operation]


def _is_missing(params: Mapping[str, Any], name: str) -> bool:
    value = params.get(name)
    return value is None or value == ""


def validate_params(operation: Operation, params: Mapping[str, Any]) -> None:
    """필수 파라미터 및 개수 제한 검증

    Raises:
        MissingParameterError: 필수 파라미터 누락 (None 또는 빈 문자열 포함)
        InvalidParameterError: 허용 개수 초과
    """
    spec = OPERATIONS[operation]

    for name in spec.required:
        if _is_missing(params, name):
            raise MissingParameterError(name)

    if spec.max_params is not None and len(params) > spec.max_params:
        if spec.max_params == len(spec.required):
            allowed = ", ".join(spec.required)
        else:
            allowed = ", ".join(spec.required) + " and one optional parameter"
        raise InvalidParameterError(
            f"{operation.value} accepts at most {spec.max_params} "
            f"parameter(s): {allowed}"
        )


def resolve_path(
    operation: Operation,
    params: Mapping[str, Any],
    version: str,
) -> str:
    """경로 템플릿의 플레이스홀더를 파라미터 값으로 치환

    값은 URL 인코딩하지 않음 (hex 문자열, 숫자 ID 등 안전한 식별자 전제).

    Args:
        operation: API 메서드
        params: 요청 파라미터
        version: API 버전 (예: v0)

    Returns:
        /{version}{template} 형태의 완성된 경로

    Raises:
        MissingParameterError: 플레이스홀더에 해당하는 값 없음
    """
    spec = OPERATIONS[operation]

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if _is_missing(params, name):
            raise MissingParameterError(name)
        return str(params[name])

    return f"/{version}" + _PLACEHOLDER.sub(_substitute, spec.template)
