"""
CoinFlux REST API 클라이언트

HMAC-SHA512 서명, nonce 기반 재전송 방지.
ICoinfluxRestClient Protocol 준수.

요청 전 검증 에러(MissingParameterError 등)는 api() 호출 시점에 즉시 발생하고,
전송 에러는 반환된 awaitable(또는 callback)로 전달됨.
nonce 발급과 서명은 awaitable이 실행되어 실제로 전송하기 직전에 수행.
재시도는 하지 않음 - 호출자가 에러 종류를 보고 결정.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping

import httpx

from adapters.coinflux.errors import (
    ApiError,
    CoinfluxError,
    CoinfluxTimeoutError,
    HttpError,
    InvalidCredentialError,
    NetworkError,
)
from adapters.coinflux.operations import (
    Operation,
    get_operation,
    resolve_path,
    validate_params,
)
from adapters.coinflux.signer import build_message, decode_secret, sign
from core.config.loader import ClientConfig, ClientOptions
from core.constants import CoinfluxHeaders
from core.types import HttpMethod
from core.utils.nonce import NonceGenerator

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# callback(error, result) - 둘 중 하나는 항상 None
Callback = Callable[[CoinfluxError | None, Any], Any]


@dataclass(frozen=True)
class PreparedRequest:
    """검증된 요청 (private 요청은 전송 직전에 서명)"""

    operation: Operation
    method: HttpMethod
    url: str
    path: str
    headers: dict[str, str] = field(repr=False)
    body: str | None = None
    nonce: int | None = None
    is_private: bool = False


class CoinfluxRestClient:
    """CoinFlux REST API 클라이언트

    ICoinfluxRestClient Protocol 구현.
    인스턴스는 불변 설정(자격증명, 옵션)만 보유하므로 여러 코루틴에서 공유 가능.

    Args:
        api_key: API 키 (private 메서드 호출 시 필수)
        api_secret: 16진수 API 시크릿 (HMAC 키, 전송하지 않음)
        options: ClientOptions 또는 옵션 딕셔너리 (timeout, version, env, ua, base_url)
        nonce_generator: nonce 생성기 (여러 클라이언트가 같은 키를 쓰면 공유)

    사용 예시:
    ```python
    async with CoinfluxRestClient(api_key="xxx", api_secret="abcd...") as client:
        rates = await client.get_rates()
        wallet = await client.get_wallet("42")
    ```
    """

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        options: ClientOptions | Mapping[str, Any] | None = None,
        nonce_generator: NonceGenerator | None = None,
    ):
        if not isinstance(options, ClientOptions):
            options = ClientOptions.from_dict(dict(options) if options else None)

        self.api_key = api_key
        self._api_secret = api_secret
        self.options = options
        self.nonces = nonce_generator or NonceGenerator()
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        nonce_generator: NonceGenerator | None = None,
    ) -> "CoinfluxRestClient":
        """load_config() 결과로 클라이언트 생성"""
        return cls(
            api_key=config.secrets.api_key,
            api_secret=config.secrets.api_secret,
            options=config.options,
            nonce_generator=nonce_generator,
        )

    def __repr__(self) -> str:
        return (
            f"CoinfluxRestClient(url={self.options.rest_url!r}, "
            f"version={self.options.version!r}, api_key={self.api_key!r})"
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.options.timeout_seconds,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CoinfluxRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # 요청 준비 (검증 → 경로) / 서명
    # -------------------------------------------------------------------------

    def prepare(
        self,
        operation: Operation | str,
        params: Mapping[str, Any] | None = None,
    ) -> PreparedRequest:
        """요청 검증 및 경로/본문 구성

        네트워크 접근 없이 동기적으로 수행.

        Args:
            operation: Operation 또는 메서드 이름 (예: "getWallet")
            params: 요청 파라미터 (None 값은 무시)

        Returns:
            서명 전 PreparedRequest (nonce는 sign_request()에서 발급)

        Raises:
            InvalidOperationError: 알 수 없는 메서드
            MissingParameterError: 필수 파라미터 누락
            InvalidParameterError: 파라미터 개수 초과 또는 float 값
            InvalidCredentialError: private 메서드인데 키/시크릿이 잘못된 경우
        """
        operation, spec = get_operation(operation)
        params = {k: v for k, v in (params or {}).items() if v is not None}

        validate_params(operation, params)
        path = resolve_path(operation, params, self.options.version)
        url = f"{self.options.rest_url}{path}"
        headers = {CoinfluxHeaders.USER_AGENT: self.options.ua}

        if not spec.is_private:
            return PreparedRequest(operation, spec.method, url, path, headers)

        if not self.api_key:
            raise InvalidCredentialError("API key is empty")
        decode_secret(self._api_secret)

        # GET은 빈 메시지, POST는 본문 전체를 서명
        body = build_message(params) if spec.method == HttpMethod.POST else None
        if body is not None:
            headers[CoinfluxHeaders.CONTENT_TYPE] = FORM_CONTENT_TYPE

        return PreparedRequest(
            operation, spec.method, url, path, headers, body, is_private=True
        )

    def sign_request(self, request: PreparedRequest) -> PreparedRequest:
        """nonce 발급 후 서명 헤더 추가

        전송 직전에 호출해야 nonce 순서와 전송 순서가 일치.
        public 요청은 그대로 반환.
        """
        if not request.is_private:
            return request

        nonce = self.nonces.next()
        signature = sign(request.path, request.body or "", self._api_secret, nonce)

        headers = {
            **request.headers,
            CoinfluxHeaders.API_KEY: self.api_key,
            CoinfluxHeaders.API_SIGN: signature,
            CoinfluxHeaders.API_NONCE: str(nonce),
        }
        return replace(request, headers=headers, nonce=nonce)

    # -------------------------------------------------------------------------
    # 전송
    # -------------------------------------------------------------------------

    async def _send(self, request: PreparedRequest) -> Any:
        """HTTP 요청 1회 전송 및 응답 정규화

        Returns:
            JSON 응답 (본문이 비어 있으면 {})

        Raises:
            CoinfluxTimeoutError: 타임아웃
            NetworkError: 응답 없이 실패
            ApiError: 2xx 이외 응답, 본문에 error 필드 있음
            HttpError: 2xx 이외 응답, error 필드 없음
        """
        client = await self._get_client()
        # 서명과 전송 사이에 await 없음
        request = self.sign_request(request)

        logger.debug(
            "CoinFlux request",
            extra={
                "operation": request.operation.value,
                "method": request.method.value,
                "path": request.path,
                "nonce": request.nonce,
            },
        )

        # options.timeout은 요청 전체 기한 (httpx timeout은 단계별 제한)
        try:
            response = await asyncio.wait_for(
                client.request(
                    request.method.value,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                ),
                timeout=self.options.timeout_seconds,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(
                "Request timeout",
                extra={"path": request.path, "timeout_ms": self.options.timeout},
            )
            raise CoinfluxTimeoutError() from e
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"path": request.path, "error": str(e)},
            )
            raise NetworkError(str(e) or type(e).__name__) from e

        if not 200 <= response.status_code < 300:
            raise self._error_from_response(request, response)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _error_from_response(
        request: PreparedRequest,
        response: httpx.Response,
    ) -> HttpError:
        """2xx 이외 응답을 HttpError / ApiError로 변환"""
        status_text = response.reason_phrase
        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None

        if isinstance(data, dict) and "error" in data:
            error: HttpError = ApiError(response.status_code, status_text, data["error"])
        else:
            error = HttpError(response.status_code, status_text)

        logger.error(
            f"CoinFlux API error: {response.status_code} - {error.error}",
            extra={"path": request.path, "operation": request.operation.value},
        )
        return error

    async def _dispatch(
        self,
        request: PreparedRequest,
        callback: Callback | None,
    ) -> Any:
        if callback is None:
            return await self._send(request)

        # callback 모드: 에러는 callback으로만 전달
        try:
            result = await self._send(request)
        except CoinfluxError as e:
            result = None
            outcome = callback(e, None)
        else:
            outcome = callback(None, result)

        if inspect.isawaitable(outcome):
            await outcome
        return result

    def api(
        self,
        operation: Operation | str,
        params: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """API 메서드 호출

        검증은 즉시 수행하고 서명/전송은 반환된 awaitable에서 수행.

        Args:
            operation: Operation 또는 메서드 이름 (예: "getRate")
            params: 요청 파라미터
            callback: 완료 시 callback(error, result) 호출 (선택)

        Returns:
            응답 JSON을 반환하는 awaitable
            (callback 지정 시 에러는 callback으로만 전달되고 None 반환)
        """
        request = self.prepare(operation, params)
        return self._dispatch(request, callback)

    # -------------------------------------------------------------------------
    # 시세 (public)
    # -------------------------------------------------------------------------

    def get_rates(self, callback: Callback | None = None) -> Awaitable[Any]:
        """전체 시세 조회"""
        return self.api(Operation.GET_RATES, callback=callback)

    def get_rate(self, pair: str, callback: Callback | None = None) -> Awaitable[Any]:
        """단일 시세 조회

        Args:
            pair: 통화쌍 (예: BTCEUR)
        """
        return self.api(Operation.GET_RATE, {"pair": pair}, callback)

    # -------------------------------------------------------------------------
    # Flux / 입금 주소
    # -------------------------------------------------------------------------

    def get_fluxes(self, callback: Callback | None = None) -> Awaitable[Any]:
        """Flux 목록 조회"""
        return self.api(Operation.GET_FLUXES, callback=callback)

    def get_flux(self, fluxid: str, callback: Callback | None = None) -> Awaitable[Any]:
        """단일 Flux 조회"""
        return self.api(Operation.GET_FLUX, {"fluxid": fluxid}, callback)

    def get_flux_addresses(
        self,
        fluxid: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """Flux에 속한 입금 주소 목록 조회"""
        return self.api(Operation.GET_FLUX_ADDRESSES, {"fluxid": fluxid}, callback)

    def get_flux_of_address(
        self,
        address: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """주소로 Flux 조회"""
        return self.api(Operation.GET_FLUX_OF_ADDRESS, {"address": address}, callback)

    def new_sell_address(
        self,
        fluxid: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """새 입금(매도) 주소 생성

        Args:
            fluxid: 주소를 생성할 Flux ID
        """
        return self.api(Operation.NEW_SELL_ADDRESS, {"fluxid": fluxid}, callback)

    # -------------------------------------------------------------------------
    # 지갑
    # -------------------------------------------------------------------------

    def get_wallets(self, callback: Callback | None = None) -> Awaitable[Any]:
        """지갑 목록 조회"""
        return self.api(Operation.GET_WALLETS, callback=callback)

    def get_wallet(self, walletid: str, callback: Callback | None = None) -> Awaitable[Any]:
        """단일 지갑 조회"""
        return self.api(Operation.GET_WALLET, {"walletid": walletid}, callback)

    def get_wallet_history(
        self,
        walletid: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """지갑 내역 조회"""
        return self.api(Operation.GET_WALLET_HISTORY, {"walletid": walletid}, callback)

    def get_wallet_history_tx(
        self,
        walletid: str,
        historyid: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """지갑 내역 단건 조회"""
        return self.api(
            Operation.GET_WALLET_HISTORY_TX,
            {"walletid": walletid, "historyid": historyid},
            callback,
        )

    # -------------------------------------------------------------------------
    # 원장
    # -------------------------------------------------------------------------

    def get_ledger(self, callback: Callback | None = None) -> Awaitable[Any]:
        """원장 조회"""
        return self.api(Operation.GET_LEDGER, callback=callback)

    def get_ledger_tx(self, ledgerid: str, callback: Callback | None = None) -> Awaitable[Any]:
        """원장 단건 조회"""
        return self.api(Operation.GET_LEDGER_TX, {"ledgerid": ledgerid}, callback)

    # -------------------------------------------------------------------------
    # 은행 계좌
    # -------------------------------------------------------------------------

    def get_bank_accounts(self, callback: Callback | None = None) -> Awaitable[Any]:
        """등록된 은행 계좌 목록 조회"""
        return self.api(Operation.GET_BANK_ACCOUNTS, callback=callback)

    def get_bank_account(
        self,
        accountid: str,
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """은행 계좌 단건 조회"""
        return self.api(Operation.GET_BANK_ACCOUNT, {"accountid": accountid}, callback)

    # -------------------------------------------------------------------------
    # 매수
    # -------------------------------------------------------------------------

    def buy_to_address(
        self,
        walletid: str,
        address: str,
        cost: Any,
        ccy1: str,
        callback: Callback | None = None,
        **extra: Any,
    ) -> Awaitable[Any]:
        """지갑 잔고로 매수 후 지정 주소로 전송

        Args:
            walletid: 결제 지갑 ID
            address: 수령 주소
            cost: 매수 금액 (지갑 통화 기준)
            ccy1: 매수 통화 (예: BTC)
            **extra: 추가 파라미터 (최대 1개)
        """
        params = {
            "walletid": walletid,
            "address": address,
            "cost": cost,
            "ccy1": ccy1,
            **extra,
        }
        return self.api(Operation.BUY_TO_ADDRESS, params, callback)
