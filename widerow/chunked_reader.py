"""Lazy byte stream over a sequence of chunk blocks."""

import io
from typing import Iterator, Optional


class ChunkedReader(io.RawIOBase):
    """
    Forward-only, single-pass stream that concatenates blocks pulled on demand.

    Only one block is held in memory at a time. The next block is requested
    when the current one is consumed; end-of-stream is reported once the block
    source is exhausted. Empty blocks are skipped.
    """

    def __init__(self, blocks: Iterator[bytes]):
        super().__init__()
        self._blocks: Optional[Iterator[bytes]] = iter(blocks)
        self._block = b""
        self._offset = 0

    def readable(self) -> bool:
        return True

    def _fill(self) -> bool:
        while self._offset >= len(self._block):
            if self._blocks is None:
                return False
            try:
                self._block = next(self._blocks)
            except StopIteration:
                self._blocks = None
                self._block = b""
                self._offset = 0
                return False
            self._offset = 0
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        view = memoryview(buffer).cast("B")
        if len(view) == 0 or not self._fill():
            return 0

        n = min(len(view), len(self._block) - self._offset)
        view[:n] = self._block[self._offset:self._offset + n]
        self._offset += n
        return n

    def close(self) -> None:
        if not self.closed and self._blocks is not None:
            close = getattr(self._blocks, "close", None)
            if close is not None:
                close()
            self._blocks = None
        super().close()
