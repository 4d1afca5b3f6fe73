"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class Environment(str, Enum):
    """API 환경 (실서버 / 테스트넷)"""

    PROD = "prod"
    TEST = "test"


class HttpMethod(str, Enum):
    """HTTP 메서드"""

    GET = "GET"
    POST = "POST"


class Visibility(str, Enum):
    """API 공개 범위

    PUBLIC은 서명 없이 호출, PRIVATE는 key/sign/nonce 헤더 필요
    """

    PUBLIC = "public"
    PRIVATE = "private"
