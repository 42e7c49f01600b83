"""A session reading whole lines asynchronously from a stream."""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Optional, TextIO

from .session import Cli, CliSession


class AsyncCliSession(CliSession):
    """A session fed line by line from an asyncio stream reader."""

    def __init__(self, cli: Cli, out: Optional[TextIO] = None) -> None:
        super().__init__(cli, out if out is not None else sys.stdout, 1)

    async def run(self, reader: Optional[asyncio.StreamReader] = None) -> None:
        """Prompt, read and run lines until the input ends.

        Without ``reader`` the process's standard input is read.
        """
        if reader is not None:
            await self._read_lines(reader)
            return
        loop = asyncio.get_running_loop()
        stdin_reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(stdin_reader)
        pipe = os.fdopen(os.dup(sys.stdin.fileno()), "rb")
        transport, _ = await loop.connect_read_pipe(lambda: protocol, pipe)
        try:
            await self._read_lines(stdin_reader)
        finally:
            transport.close()

    async def _read_lines(self, reader) -> None:
        while True:
            self.prompt()
            data = await reader.readline()
            if not data:
                return
            line = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
            if line.endswith("\n"):
                line = line[:-1]
            self.feed(line)