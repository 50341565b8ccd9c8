"""
Stdio transport: one JSON-RPC message per line in, one per line out.

stdout carries protocol traffic only; logs go to files (see logger.py).
"""

import asyncio
import json
import sys
from typing import Any, Dict, Optional, Tuple

from .logger import get_logger
from .protocol import INVALID_REQUEST, PARSE_ERROR, ProtocolError

log = get_logger("transport")

# Large product batches and base64 uploads arrive as a single line
LINE_LIMIT = 2**24


class RawStdioTransport:
    """Newline-delimited JSON-RPC over stdin/stdout, or any reader/writer pair."""

    def __init__(self, reader: Optional[asyncio.StreamReader] = None, writer=None, limit: int = LINE_LIMIT):
        self.running = False
        self._limit = limit
        self._reader = reader
        self._out = writer
        self._write_lock = asyncio.Lock()

    async def start(self):
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=self._limit)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        # connect_write_pipe fails when stdout is a file or a tty; write the buffer directly
        if self._out is None:
            self._out = sys.stdout.buffer
        self.running = True
        log.info("Transport started")

    async def read_message(self) -> Optional[Tuple[bytes, Any]]:
        """
        Next message as (raw_line, decoded), or None at EOF.

        Blank lines are skipped. A line that is not UTF-8 JSON raises
        ProtocolError(PARSE_ERROR); a line longer than the limit is discarded
        and raises ProtocolError(INVALID_REQUEST). Either way the stream stays
        usable and the caller answers and keeps reading.
        """
        if self._reader is None:
            raise RuntimeError("Transport not started")

        line = b"\n"
        while not line.strip():
            line = await self._next_line()
            if not line:
                return None

        try:
            decoded = json.loads(line)
        except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
            log.error(f"Unparseable line ({len(line)} bytes): {exc}")
            raise ProtocolError(PARSE_ERROR, f"Parse error: {exc}")

        log.debug(f"<- {len(line)} bytes")
        return line, decoded

    async def _next_line(self) -> bytes:
        try:
            return await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            return exc.partial  # last line without a newline, or b"" at EOF
        except asyncio.LimitOverrunError:
            await self._skip_line()
            log.error(f"Discarded a line over {self._limit} bytes")
            raise ProtocolError(INVALID_REQUEST, f"Message exceeds {self._limit} bytes")

    async def _skip_line(self):
        """Drop buffered input through the next newline (or EOF)."""
        while True:
            try:
                await self._reader.readuntil(b"\n")
                return
            except asyncio.LimitOverrunError as exc:
                await self._reader.readexactly(exc.consumed)
            except asyncio.IncompleteReadError:
                return

    async def write_message(self, message: Dict[str, Any]):
        if self._out is None:
            raise RuntimeError("Transport not started")

        line = json.dumps(message, separators=(",", ":"), ensure_ascii=False).encode("utf-8") + b"\n"

        # responses finish out of order; never interleave two lines
        async with self._write_lock:
            self._out.write(line)
            self._out.flush()
        log.debug(f"-> {len(line)} bytes")

    async def close(self):
        self.running = False
        log.info("Transport closed")
