"""
CoinFlux API 에러

모든 에러는 status_code / status_text / error 세 필드를 가지며
to_dict()로 {"statusCode", "statusText", "error"} 형태로 변환 가능.

- 요청 전 검증 에러: MissingParameterError, InvalidParameterError,
  InvalidOperationError, InvalidCredentialError (네트워크 접근 없음)
- 전송 에러: CoinfluxTimeoutError, NetworkError, HttpError, ApiError

재시도 판단 기준: Timeout/Network는 재시도 가능, Http/Api는 재시도 금지.
"""

from typing import Any


class CoinfluxError(Exception):
    """CoinFlux 클라이언트 에러 (기본 클래스)"""

    def __init__(
        self,
        error: str,
        status_code: int | str | None = None,
        status_text: str | None = None,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.error = error
        super().__init__(error)

    def to_dict(self) -> dict[str, Any]:
        """구조화된 에러 딕셔너리"""
        return {
            "statusCode": self.status_code,
            "statusText": self.status_text,
            "error": self.error,
        }

    def __str__(self) -> str:
        if self.status_code is None:
            return self.error
        return f"CoinFlux API Error [{self.status_code}]: {self.error}"


class MissingParameterError(CoinfluxError):
    """필수 파라미터 누락"""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing parameter: {parameter}")


class InvalidParameterError(CoinfluxError):
    """허용되지 않는 파라미터 조합 (개수 초과 등)"""

    pass


class InvalidOperationError(CoinfluxError):
    """알 수 없는 API 메서드"""

    def __init__(self, operation: Any):
        self.operation = operation
        super().__init__(f"{operation} is not a valid API method.")


class InvalidCredentialError(CoinfluxError):
    """API 시크릿 형식 오류 (16진수 문자열이 아님)"""

    pass


class CoinfluxTimeoutError(CoinfluxError):
    """요청 타임아웃"""

    def __init__(self, error: str = "Connection timed out"):
        super().__init__(
            error,
            status_code="ECONNABORTED",
            status_text="Connection timed out",
        )


class NetworkError(CoinfluxError):
    """응답 없이 실패 (DNS, 연결 거부 등)"""

    def __init__(self, error: str):
        super().__init__(error, status_code=None, status_text="Network error")


class HttpError(CoinfluxError):
    """2xx 이외 응답 (본문에 error 필드 없음)

    error는 status_text와 동일.
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        error: str | None = None,
    ):
        super().__init__(
            error if error is not None else status_text,
            status_code=status_code,
            status_text=status_text,
        )


class ApiError(HttpError):
    """2xx 이외 응답 (서버가 error 메시지를 제공)"""

    def __init__(self, status_code: int, status_text: str, error: str):
        super().__init__(status_code, status_text, error)
