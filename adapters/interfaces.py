"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Awaitable, Callable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ICoinfluxRestClient(Protocol):
    """CoinFlux REST API 클라이언트 인터페이스

    모든 메서드는 요청 전 검증을 즉시 수행하고 awaitable을 반환.
    callback을 넘기면 완료 시 callback(error, result) 호출.
    """

    def api(
        self,
        operation: Any,
        params: Mapping[str, Any] | None = None,
        callback: Callable[[Any, Any], Any] | None = None,
    ) -> Awaitable[Any]:
        """메서드 이름으로 API 호출

        Raises:
            InvalidOperationError: 알 수 없는 메서드
            MissingParameterError: 필수 파라미터 누락
        """
        ...

    async def close(self) -> None:
        """HTTP 리소스 정리"""
        ...

    # -------------------------------------------------------------------------
    # public
    # -------------------------------------------------------------------------

    def get_rates(self, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_rate(self, pair: str, callback: Any = None) -> Awaitable[Any]:
        ...

    # -------------------------------------------------------------------------
    # private
    # -------------------------------------------------------------------------

    def get_fluxes(self, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_flux(self, fluxid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_flux_addresses(self, fluxid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_flux_of_address(self, address: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def new_sell_address(self, fluxid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_wallets(self, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_wallet(self, walletid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_wallet_history(self, walletid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_wallet_history_tx(
        self,
        walletid: str,
        historyid: str,
        callback: Any = None,
    ) -> Awaitable[Any]:
        ...

    def get_ledger(self, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_ledger_tx(self, ledgerid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_bank_accounts(self, callback: Any = None) -> Awaitable[Any]:
        ...

    def get_bank_account(self, accountid: str, callback: Any = None) -> Awaitable[Any]:
        ...

    def buy_to_address(
        self,
        walletid: str,
        address: str,
        cost: Any,
        ccy1: str,
        callback: Any = None,
        **extra: Any,
    ) -> Awaitable[Any]:
        """매수 후 주소로 전송

        Raises:
            InvalidParameterError: 추가 파라미터가 2개 이상
        """
        ...
