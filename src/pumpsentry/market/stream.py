"""Websocket connection to the all-market ticker stream."""

import asyncio
import json
from typing import Any, Callable, List, Optional

import aiohttp

from ..config.logging import get_logger

logger = get_logger(__name__)

BatchHandler = Callable[[List[Any]], None]


class TickerStream:
    """
    Owned connection to a ticker stream.

    Each consumer constructs its own instance. :meth:`run` connects, pushes
    every decoded batch to the subscribed handlers and reconnects after a
    fixed delay whenever the connection drops, until :meth:`stop` is called
    or the task is cancelled.
    """

    def __init__(
        self,
        url: str,
        reconnect_delay: float = 5.0,
        heartbeat: float = 20.0,
    ):
        self.url = url
        self.reconnect_delay = reconnect_delay
        self.heartbeat = heartbeat
        self.logger = logger.bind(component="ticker_stream", url=url)
        self._handlers: List[BatchHandler] = []
        self._stopping = False
        self._ws: Optional[aiohttp.ClientWebSocketResponse] = None

    def subscribe(self, handler: BatchHandler) -> Callable[[], None]:
        """
        Register a handler for decoded batches.

        Returns:
            Callable that removes the handler again
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def dispatch(self, payload: str) -> None:
        """Decode one stream message and hand the batch to every handler."""
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            self.logger.warning("Discarding undecodable stream message")
            return

        batch = data if isinstance(data, list) else [data]
        for handler in list(self._handlers):
            try:
                handler(batch)
            except Exception as e:
                self.logger.error(
                    "Stream handler failed", error=str(e), exc_info=True
                )

    async def run(self) -> None:
        """Consume the stream forever with fixed-delay reconnects."""
        self._stopping = False
        while not self._stopping:
            try:
                await self._consume()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                self.logger.warning("Ticker stream connection failed", error=str(e))
            except Exception as e:
                self.logger.error(
                    "Ticker stream consumer crashed", error=str(e), exc_info=True
                )

            if self._stopping:
                break
            self.logger.info(
                "Ticker stream closed, reconnecting",
                delay_seconds=self.reconnect_delay,
            )
            await asyncio.sleep(self.reconnect_delay)

        self.logger.info("Ticker stream stopped")

    async def _consume(self) -> None:
        async with aiohttp.ClientSession() as session:
            async with session.ws_connect(self.url, heartbeat=self.heartbeat) as ws:
                self._ws = ws
                self.logger.info("Ticker stream connected")
                try:
                    async for msg in ws:
                        if msg.type == aiohttp.WSMsgType.TEXT:
                            self.dispatch(msg.data)
                        elif msg.type == aiohttp.WSMsgType.ERROR:
                            self.logger.warning(
                                "Ticker stream error", error=str(ws.exception())
                            )
                            break
                finally:
                    self._ws = None

    async def stop(self) -> None:
        """Stop reconnecting and close the current connection."""
        self._stopping = True
        if self._ws is not None and not self._ws.closed:
            await self._ws.close()
