"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → coinflux-client/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class CoinfluxEndpoints:
    """CoinFlux API 엔드포인트 (고정값)"""

    PROD_REST_URL: str = "https://api.coinflux.com"
    TEST_REST_URL: str = "https://apitestnet.coinflux.com"


class CoinfluxHeaders:
    """Private API 인증 헤더 이름"""

    API_KEY: str = "coinflux-api-key"
    API_SIGN: str = "coinflux-api-sign"
    API_NONCE: str = "coinflux-api-nonce"
    USER_AGENT: str = "user-agent"
    CONTENT_TYPE: str = "content-type"


class Defaults:
    """기본값 상수"""

    API_VERSION: str = "v0"
    TIMEOUT_MS: int = 20000
    ENV: str = "prod"
    USER_AGENT: str = "CoinFlux Python API Client"

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
