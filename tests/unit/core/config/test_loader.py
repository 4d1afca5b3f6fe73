"""
core/config/loader.py 테스트

secrets.yaml 로드, 검증, 클라이언트 옵션 생성 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    ClientConfig,
    ClientOptions,
    Secrets,
    SecretsLoadError,
    get_rest_url,
    load_client_options,
    load_config,
    load_secrets,
    parse_environment,
)
from core.constants import CoinfluxEndpoints, Defaults
from core.types import Environment


class TestSecrets:
    """Secrets 데이터클래스 테스트"""

    def test_creation(self) -> None:
        """기본 생성"""
        secrets = Secrets(env=Environment.TEST, api_key="test_key", api_secret="00ff")

        assert secrets.env == Environment.TEST
        assert secrets.api_key == "test_key"
        assert secrets.api_secret == "00ff"

    def test_frozen(self) -> None:
        """불변성 확인"""
        secrets = Secrets(env=Environment.TEST, api_key="key", api_secret="00ff")

        with pytest.raises(AttributeError):
            secrets.api_key = "new_key"  # type: ignore

    def test_repr_masks_secret(self) -> None:
        secrets = Secrets(env=Environment.PROD, api_key="key", api_secret="deadbeef")

        assert "deadbeef" not in repr(secrets)
        assert "key" in repr(secrets)


class TestClientOptions:
    """ClientOptions 데이터클래스 테스트"""

    def test_defaults(self) -> None:
        options = ClientOptions()

        assert options.timeout == 20000
        assert options.version == "v0"
        assert options.env == Environment.PROD
        assert options.ua == Defaults.USER_AGENT
        assert options.base_url is None
        assert options.rest_url == CoinfluxEndpoints.PROD_REST_URL

    def test_env_from_string(self) -> None:
        options = ClientOptions(env="test")  # type: ignore[arg-type]

        assert options.env == Environment.TEST
        assert options.rest_url == CoinfluxEndpoints.TEST_REST_URL

    def test_invalid_env(self) -> None:
        with pytest.raises(ValueError, match="유효하지 않은 env"):
            ClientOptions(env="staging")  # type: ignore[arg-type]

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError):
            ClientOptions(timeout=0)

    def test_timeout_seconds(self) -> None:
        assert ClientOptions(timeout=2500).timeout_seconds == 2.5

    def test_frozen(self) -> None:
        options = ClientOptions()

        with pytest.raises(AttributeError):
            options.version = "v9"  # type: ignore

    def test_from_dict_partial(self) -> None:
        options = ClientOptions.from_dict({"version": "v1"})

        assert options.version == "v1"
        assert options.timeout == 20000

    def test_from_dict_empty(self) -> None:
        assert ClientOptions.from_dict(None) == ClientOptions()
        assert ClientOptions.from_dict({}) == ClientOptions()

    def test_from_dict_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="알 수 없는 옵션"):
            ClientOptions.from_dict({"url": "http://x"})


class TestEnvironmentHelpers:
    """parse_environment / get_rest_url 테스트"""

    def test_parse(self) -> None:
        assert parse_environment("prod") == Environment.PROD
        assert parse_environment(Environment.TEST) == Environment.TEST

    def test_rest_url(self) -> None:
        assert get_rest_url(Environment.PROD) == "https://api.coinflux.com"
        assert get_rest_url(Environment.TEST) == "https://apitestnet.coinflux.com"


class TestLoadSecrets:
    """load_secrets 함수 테스트"""

    def test_load_test_env(self, temp_secrets_file: Path) -> None:
        """test 환경 로드"""
        secrets = load_secrets(temp_secrets_file)

        assert secrets.env == Environment.TEST
        assert secrets.api_key == "test_api_key_abcde"
        assert secrets.api_secret == "0123456789abcdef0123456789abcdef"

    def test_load_prod_env(self, temp_secrets_file_production: Path) -> None:
        """prod 환경 로드"""
        secrets = load_secrets(temp_secrets_file_production)

        assert secrets.env == Environment.PROD
        assert secrets.api_key == "prod_api_key_12345"
        assert secrets.api_secret == "ffeeddccbbaa99887766554433221100"

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일 없음"""
        non_existent = temp_dir / "nonexistent.yaml"

        with pytest.raises(SecretsLoadError, match="찾을 수 없습니다"):
            load_secrets(non_existent)

    def test_invalid_env(self, temp_secrets_file_invalid_env: Path) -> None:
        """유효하지 않은 env"""
        with pytest.raises(ValueError, match="유효하지 않은 env"):
            load_secrets(temp_secrets_file_invalid_env)

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일"""
        empty_file = temp_dir / "empty.yaml"
        empty_file.write_text("", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="비어 있습니다"):
            load_secrets(empty_file)

    def test_not_a_mapping(self, temp_dir: Path) -> None:
        file = temp_dir / "list.yaml"
        file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="매핑"):
            load_secrets(file)

    def test_missing_env(self, temp_dir: Path) -> None:
        """env 필드 누락"""
        content = """
test:
  api_key: "key"
  api_secret: "00ff"
"""
        file = temp_dir / "no_env.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'env' 필드가 없습니다"):
            load_secrets(file)

    def test_missing_env_section(self, temp_dir: Path) -> None:
        content = """
env: prod
test:
  api_key: "key"
  api_secret: "00ff"
"""
        file = temp_dir / "no_prod.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'prod' 설정이 없습니다"):
            load_secrets(file)

    def test_missing_api_key(self, temp_dir: Path) -> None:
        """api_key 누락"""
        content = """
env: test
test:
  api_secret: "00ff"
"""
        file = temp_dir / "no_api_key.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'api_key'가 없습니다"):
            load_secrets(file)

    def test_missing_api_secret(self, temp_dir: Path) -> None:
        """api_secret 누락"""
        content = """
env: test
test:
  api_key: "key"
"""
        file = temp_dir / "no_api_secret.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'api_secret'가 없습니다"):
            load_secrets(file)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """잘못된 YAML 형식"""
        file = temp_dir / "invalid.yaml"
        file.write_text("invalid: yaml: content:", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="파싱 실패"):
            load_secrets(file)

    def test_env_section_not_a_mapping(self, temp_dir: Path) -> None:
        """환경 섹션이 매핑이 아니면 SecretsLoadError"""
        file = temp_dir / "scalar_section.yaml"
        file.write_text("env: test\ntest: \"oops\"\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'test' 설정은 매핑"):
            load_secrets(file)

    def test_env_override(self, temp_secrets_file: Path) -> None:
        """env 인자가 파일의 env보다 우선"""
        secrets = load_secrets(temp_secrets_file, env="prod")

        assert secrets.env == Environment.PROD
        assert secrets.api_key == "prod_api_key_12345"

    def test_env_override_invalid(self, temp_secrets_file: Path) -> None:
        with pytest.raises(ValueError, match="유효하지 않은 env"):
            load_secrets(temp_secrets_file, env="staging")


class TestLoadClientOptions:
    """load_client_options 함수 테스트"""

    def test_options_not_a_mapping(self, temp_dir: Path) -> None:
        file = temp_dir / "scalar_options.yaml"
        file.write_text(
            "env: test\ntest:\n  api_key: key\n  api_secret: \"00ff\"\noptions: fast\n",
            encoding="utf-8",
        )

        with pytest.raises(SecretsLoadError, match="options 섹션은 매핑"):
            load_client_options(file)

    def test_without_options_section(self, temp_secrets_file: Path) -> None:
        """options 섹션 없으면 env만 반영"""
        options = load_client_options(temp_secrets_file)

        assert options.env == Environment.TEST
        assert options.timeout == 20000
        assert options.version == "v0"

    def test_with_options_section(self, temp_secrets_file_production: Path) -> None:
        options = load_client_options(temp_secrets_file_production)

        assert options.env == Environment.PROD
        assert options.timeout == 5000
        assert options.version == "v1"
        assert options.ua == "coinflux-test-agent"

    def test_unknown_option(self, temp_dir: Path) -> None:
        content = """
env: test
test:
  api_key: "key"
  api_secret: "00ff"
options:
  retries: 3
"""
        file = temp_dir / "bad_options.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="options 섹션 오류"):
            load_client_options(file)

    def test_env_inside_options(self, temp_dir: Path) -> None:
        content = """
env: test
test:
  api_key: "key"
  api_secret: "00ff"
options:
  env: prod
"""
        file = temp_dir / "env_in_options.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="최상위"):
            load_client_options(file)


class TestLoadConfig:
    """load_config 함수 테스트"""

    def test_returns_config(self, temp_secrets_file_production: Path) -> None:
        config = load_config(temp_secrets_file_production)

        assert isinstance(config, ClientConfig)
        assert config.secrets.api_key == "prod_api_key_12345"
        assert config.options.env == config.secrets.env == Environment.PROD
        assert config.options.rest_url == CoinfluxEndpoints.PROD_REST_URL

    def test_frozen(self, temp_secrets_file: Path) -> None:
        config = load_config(temp_secrets_file)

        with pytest.raises(AttributeError):
            config.options = ClientOptions()  # type: ignore

    def test_env_override_selects_section_and_url(
        self,
        temp_secrets_file_production: Path,
    ) -> None:
        """env 인자로 test 섹션 선택 시 options도 test URL 사용"""
        config = load_config(temp_secrets_file_production, env=Environment.TEST)

        assert config.secrets.api_key == "test_api_key_abcde"
        assert config.options.rest_url == CoinfluxEndpoints.TEST_REST_URL
        assert config.options.version == "v1"
