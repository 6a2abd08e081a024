from __future__ import annotations

import io
from dataclasses import dataclass

from urllib3.exceptions import HTTPError
from urllib3.response import BaseHTTPResponse

from digestkit.application.ports.byte_source_port import ByteSource


@dataclass
class HttpResponseSource(ByteSource):
    """Adapta um HTTPResponse do urllib3 (preload_content=False) ao contrato ByteSource.

    Exemplo
    >>> from urllib3.response import HTTPResponse
    >>> src = HttpResponseSource(HTTPResponse(body=io.BytesIO(b"abc"), preload_content=False))
    >>> src.read(2), src.read(2), src.read(2)
    (b'ab', b'c', b'')
    """

    response: BaseHTTPResponse

    def read(self, size: int = -1) -> bytes:
        """Le ate `size` bytes do corpo; erros do urllib3 viram OSError."""
        amt = None if size is None or size < 0 else size
        try:
            return self.response.read(amt)
        except HTTPError as exc:
            raise OSError(f"Falha ao ler resposta HTTP: {exc}") from exc

    def close(self) -> None:
        """Fecha a resposta e devolve a conexao ao pool."""
        try:
            self.response.close()
        finally:
            self.response.release_conn()


def to_byte_source(obj: object) -> ByteSource:
    """Converte bytes, respostas urllib3 ou objetos file-like em ByteSource.

    Exemplo
    >>> to_byte_source(b"abc").read()
    b'abc'
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(obj))
    if isinstance(obj, BaseHTTPResponse):
        return HttpResponseSource(obj)
    if callable(getattr(obj, "read", None)) and callable(getattr(obj, "close", None)):
        return obj  # type: ignore[return-value]
    raise TypeError(f"Nao e possivel usar {type(obj).__name__} como fonte de bytes")
