"""
설정 로더

secrets.yaml 로드 및 클라이언트 옵션 생성
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from core.constants import CoinfluxEndpoints, Defaults, Paths
from core.types import Environment


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    env: Environment
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        # api_secret은 로그/트레이스백에 노출 금지
        return f"Secrets(env={self.env.value!r}, api_key={self.api_key!r}, api_secret='***')"


@dataclass(frozen=True)
class ClientOptions:
    """클라이언트 옵션

    Args:
        timeout: 요청 타임아웃 (밀리초)
        version: API 버전 경로 세그먼트
        env: 접속 환경 (prod / test)
        ua: user-agent 헤더 값
        base_url: 베이스 URL 직접 지정 (None이면 env로 결정)
    """

    timeout: int = Defaults.TIMEOUT_MS
    version: str = Defaults.API_VERSION
    env: Environment = Environment(Defaults.ENV)
    ua: str = Defaults.USER_AGENT
    base_url: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.env, Environment):
            object.__setattr__(self, "env", parse_environment(self.env))
        if self.timeout <= 0:
            raise ValueError(f"timeout은 양수여야 합니다: {self.timeout}")
        if self.base_url:
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def rest_url(self) -> str:
        """요청 대상 베이스 URL"""
        if self.base_url:
            return self.base_url
        return get_rest_url(self.env)

    @property
    def timeout_seconds(self) -> float:
        """httpx용 타임아웃 (초)"""
        return self.timeout / 1000

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ClientOptions":
        """딕셔너리에서 옵션 생성

        지정하지 않은 키는 기본값 사용.

        Raises:
            ValueError: 알 수 없는 옵션 키 또는 잘못된 env
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"알 수 없는 옵션입니다: {sorted(unknown)}. 유효한 키: {sorted(known)}"
            )

        return cls(**data)


@dataclass(frozen=True)
class ClientConfig:
    """클라이언트 생성에 필요한 전체 설정"""

    secrets: Secrets
    options: ClientOptions


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def parse_environment(value: str | Environment) -> Environment:
    """문자열을 Environment로 변환

    Raises:
        ValueError: 유효하지 않은 env인 경우
    """
    try:
        return Environment(value)
    except ValueError as e:
        valid_envs = [env.value for env in Environment]
        raise ValueError(
            f"유효하지 않은 env입니다: '{value}'. "
            f"유효한 값: {valid_envs}"
        ) from e


def get_rest_url(env: Environment) -> str:
    """환경별 REST 베이스 URL 반환"""
    if env == Environment.PROD:
        return CoinfluxEndpoints.PROD_REST_URL
    return CoinfluxEndpoints.TEST_REST_URL


def _read_yaml(path: Path | None) -> dict[str, Any]:
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    return data


def _secrets_from_data(
    data: dict[str, Any],
    env: str | Environment | None = None,
) -> Secrets:
    # env 인자가 있으면 파일의 env보다 우선
    env_str = env if env is not None else data.get("env")
    if env_str is None:
        raise SecretsLoadError("secrets.yaml에 'env' 필드가 없습니다")

    env = parse_environment(env_str)

    # 해당 환경의 API 키 로드
    env_config = data.get(env.value)
    if env_config is None:
        raise SecretsLoadError(f"secrets.yaml에 '{env.value}' 설정이 없습니다")
    if not isinstance(env_config, dict):
        raise SecretsLoadError(f"secrets.yaml의 '{env.value}' 설정은 매핑이어야 합니다")

    api_key = env_config.get("api_key")
    api_secret = env_config.get("api_secret")

    if not api_key:
        raise SecretsLoadError(
            f"secrets.yaml의 {env.value} 섹션에 'api_key'가 없습니다"
        )
    if not api_secret:
        raise SecretsLoadError(
            f"secrets.yaml의 {env.value} 섹션에 'api_secret'가 없습니다"
        )

    return Secrets(env=env, api_key=str(api_key), api_secret=str(api_secret))


def load_secrets(
    path: Path | None = None,
    env: str | Environment | None = None,
) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)
        env: 사용할 환경 (None이면 파일의 env)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 env인 경우
    """
    return _secrets_from_data(_read_yaml(path), env)


def load_client_options(
    path: Path | None = None,
    env: str | Environment | None = None,
) -> ClientOptions:
    """secrets.yaml의 options 섹션과 env로 ClientOptions 생성

    options 섹션이 없으면 env만 반영한 기본 옵션 반환.
    """
    data = _read_yaml(path)
    secrets = _secrets_from_data(data, env)
    return _options_from_data(data, secrets)


def _options_from_data(data: dict[str, Any], secrets: Secrets) -> ClientOptions:
    options_raw = data.get("options") or {}
    if not isinstance(options_raw, dict):
        raise SecretsLoadError("secrets.yaml의 options 섹션은 매핑이어야 합니다")
    options_data = dict(options_raw)
    if "env" in options_data:
        raise SecretsLoadError("env는 options가 아닌 최상위에 지정해야 합니다")
    options_data["env"] = secrets.env

    try:
        return ClientOptions.from_dict(options_data)
    except (TypeError, ValueError) as e:
        raise SecretsLoadError(f"secrets.yaml options 섹션 오류: {e}") from e


def load_config(
    path: Path | None = None,
    env: str | Environment | None = None,
) -> ClientConfig:
    """secrets.yaml 전체 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)
        env: 사용할 환경 (None이면 파일의 env)

    Returns:
        ClientConfig 인스턴스 (secrets + options)
    """
    data = _read_yaml(path)
    secrets = _secrets_from_data(data, env)
    return ClientConfig(secrets=secrets, options=_options_from_data(data, secrets))
