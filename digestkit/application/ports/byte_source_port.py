from __future__ import annotations

from typing import Protocol


class ByteSource(Protocol):
    """Fonte de bytes ordenada e finita consumida pelos servicos de digest."""

    def read(self, size: int = -1) -> bytes:
        """Le ate `size` bytes; bytes vazios indicam fim do fluxo."""
        ...

    def close(self) -> None:
        """Libera a fonte."""
        ...
