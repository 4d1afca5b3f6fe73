"""
Nonce 생성 유틸리티

Private API 요청마다 포함되는 nonce 생성.
서버는 nonce를 재전송 공격 방지에 사용하므로 같은 API 키에 대해
절대 중복되거나 감소하면 안 됨.
"""

import threading
import time
from typing import Callable


def now_us() -> int:
    """현재 시각 (Unix epoch 마이크로초)"""
    return time.time_ns() // 1000


class NonceGenerator:
    """단조 증가 nonce 생성기

    벽시계 기반 마이크로초 값을 사용하되, 같은 마이크로초 안에서
    연속 호출되거나 시계가 뒤로 가더라도 직전 값 + 1을 보장.
    Lock으로 직렬화하므로 여러 스레드/코루틴에서 공유해도 안전.

    Args:
        clock: 마이크로초 시계 함수 (테스트용 주입)

    사용 예시:
    ```python
    nonces = NonceGenerator()
    nonce = nonces.next()
    ```
    """

    def __init__(self, clock: Callable[[], int] = now_us):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        """다음 nonce 반환

        Returns:
            직전 값보다 반드시 큰 정수
        """
        with self._lock:
            nonce = max(self._clock(), self._last + 1)
            self._last = nonce
            return nonce

    @property
    def last(self) -> int:
        """마지막으로 발급한 nonce (발급 전이면 0)"""
        return self._last
