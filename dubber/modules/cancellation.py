"""
Dubber 취소 토큰 모듈

호출자가 진행 중인 번역을 취소할 때 사용하는 신호입니다.
내부 타임아웃과 구분되며, 취소 시 CancellationRequested가 발생합니다.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

from .errors import CancellationRequested


T = TypeVar("T")


class CancellationToken:
    """호출자 측 취소 신호"""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """취소 요청"""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancellationRequested()

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, delay: float) -> None:
        """
        delay초 동안 대기합니다.
        대기 중 취소되면 즉시 CancellationRequested를 발생시킵니다.
        """
        self.raise_if_cancelled()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return
        raise CancellationRequested()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        awaitable을 실행하되, 먼저 취소되면 작업을 중단하고
        CancellationRequested를 발생시킵니다.
        """
        if self.is_cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise CancellationRequested()

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, waiter},
                return_when=asyncio.FIRST_COMPLETED
            )
            if work in done:
                return work.result()
            raise CancellationRequested()
        finally:
            for task in (work, waiter):
                if not task.done():
                    task.cancel()
            await asyncio.gather(work, waiter, return_exceptions=True)


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel_token: Optional[CancellationToken] = None
) -> T:
    """토큰이 있으면 취소 가능하게, 없으면 그대로 실행합니다."""
    if cancel_token is None:
        return await awaitable
    return await cancel_token.run(awaitable)
