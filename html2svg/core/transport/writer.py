"""
Chunked Writer
==============

Backpressure-safe delivery of a payload to an output sink. Some sinks drop
or reorder data when written faster than they drain (slow pipes, container
log streams), so the payload goes out in fixed-size chunks and each write
must be acknowledged before the next one starts.
"""

from typing import Any, BinaryIO, Iterator, Protocol
import asyncio

from html2svg.config.logging import get_logger
from html2svg.core.exceptions import TransportError

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 1024


class OutputSink(Protocol):
    """Destination accepting one chunk at a time."""

    async def write(self, chunk: bytes) -> None:
        """Write ``chunk`` and return once the sink has accepted it."""
        ...


class StreamSink:
    """Sink over a blocking binary stream such as ``sys.stdout.buffer``.

    Each chunk is written and flushed in a worker thread so the event loop
    keeps running while a slow reader drains the stream.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def _write_and_flush(self, chunk: bytes) -> None:
        self.stream.write(chunk)
        self.stream.flush()

    async def write(self, chunk: bytes) -> None:
        await asyncio.to_thread(self._write_and_flush, chunk)


def iter_chunks(payload: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield consecutive slices of ``payload`` of at most ``chunk_size`` bytes."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    view = memoryview(payload)
    for offset in range(0, len(view), chunk_size):
        yield bytes(view[offset : offset + chunk_size])


async def deliver(sink: OutputSink, payload: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Write ``payload`` to ``sink`` chunk by chunk.

    Args:
        sink: Destination for the payload
        payload: Bytes to deliver
        chunk_size: Maximum bytes per write

    Returns:
        Number of bytes delivered, always ``len(payload)``

    Raises:
        TransportError: If any write fails; later chunks are not written
    """
    delivered = 0
    log: Any = logger.bind(component="transport", size=len(payload), chunk_size=chunk_size)

    for index, chunk in enumerate(iter_chunks(payload, chunk_size)):
        try:
            await sink.write(chunk)
        except Exception as e:
            log.error("Output write failed", chunk_index=index, delivered=delivered, error=str(e))
            raise TransportError(
                f"Failed to write chunk {index} at offset {delivered}: {e}",
                chunk_index=index,
                bytes_delivered=delivered,
            ) from e
        delivered += len(chunk)

    log.debug("Payload delivered", delivered=delivered)
    return delivered
