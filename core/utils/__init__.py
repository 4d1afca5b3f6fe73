"""
유틸리티 패키지

nonce 생성 등 공통 유틸리티
"""

from core.utils.nonce import NonceGenerator, now_us

__all__ = [
    "NonceGenerator",
    "now_us",
]
