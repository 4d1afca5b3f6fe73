"""
pytest 공통 fixture 정의

설정 파일 / 임시 디렉토리 fixture
"""

import tempfile
from pathlib import Path

import pytest


# 테스트용 16진수 시크릿 (서명 golden vector와 동일)
TEST_API_SECRET = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = f"""# 테스트용 secrets.yaml
env: test

prod:
  api_key: "prod_api_key_12345"
  api_secret: "ffeeddccbbaa99887766554433221100"

test:
  api_key: "test_api_key_abcde"
  api_secret: "{TEST_API_SECRET}"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_production(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (prod 환경 + options)"""
    secrets_content = """env: prod

prod:
  api_key: "prod_api_key_12345"
  api_secret: "ffeeddccbbaa99887766554433221100"

test:
  api_key: "test_api_key_abcde"
  api_secret: "0123456789abcdef0123456789abcdef"

options:
  timeout: 5000
  version: v1
  ua: "coinflux-test-agent"
"""
    secrets_path = temp_dir / "secrets_prod.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_invalid_env(temp_dir: Path) -> Path:
    """잘못된 env의 secrets.yaml 파일 생성"""
    secrets_content = """env: staging

prod:
  api_key: "prod_api_key"
  api_secret: "00ff"

test:
  api_key: "test_api_key"
  api_secret: "00ff"
"""
    secrets_path = temp_dir / "secrets_invalid.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path
