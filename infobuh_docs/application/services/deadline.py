"""
Срок выполнения запроса, общий для всех этапов конвейера
"""

import asyncio
import time
from typing import Any, Awaitable, Optional, TypeVar

from ...domain.exceptions.document_exceptions import GenerationTimeoutError

T = TypeVar("T")


class Deadline:
    """Абсолютный срок, отсчитываемый по monotonic-часам. None - без ограничения."""

    def __init__(self, timeout: Optional[float] = None):
        if timeout is not None and timeout <= 0:
            raise ValueError("Таймаут должен быть положительным")
        self.timeout = timeout
        self._expires_at = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> Optional[float]:
        """Оставшееся время в секундах (не меньше нуля) или None"""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, stage: str) -> None:
        """Бросает GenerationTimeoutError, если срок уже истек"""
        if self.expired:
            raise GenerationTimeoutError(stage, self.timeout)

    async def run(self, stage: str, awaitable: Awaitable[T]) -> T:
        """Выполняет этап в пределах оставшегося времени"""
        if self.expired:
            # корутина не была запущена
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise GenerationTimeoutError(stage, self.timeout)

        try:
            return await asyncio.wait_for(awaitable, timeout=self.remaining())
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(stage, self.timeout) from e

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout}, remaining={self.remaining()})"
