from __future__ import annotations

import io
import logging
import re
from contextlib import closing
from typing import Optional, Union

from digestkit.application.ports.byte_source_port import ByteSource

logger = logging.getLogger(__name__)

NULL_EXCEPTION_TEXT = "[exception is null]"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_READ_CHUNK = 8192


def is_blank(value: Optional[str]) -> bool:
    """Retorna True para None ou texto composto apenas de espacos."""
    return value is None or not value.strip()


def parse_int_or(value: object, fallback: int) -> int:
    """Converte para int, retornando `fallback` em qualquer falha de parsing.

    Exemplo
    >>> parse_int_or("42", 7), parse_int_or("abc", 7), parse_int_or(None, 7)
    (42, 7, 7)
    """
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback


def read_all_text(source: ByteSource, encoding: str = "utf-8") -> str:
    """Le a fonte inteira como texto, terminando cada linha com '\\n'.

    A fonte e sempre fechada. Falhas de leitura sao ignoradas e o que ja
    foi lido e devolvido; sem conteudo, retorna string vazia.
    """
    buffer = bytearray()
    try:
        with closing(source):
            for chunk in iter(lambda: source.read(_READ_CHUNK), b""):
                buffer.extend(chunk)
    except Exception as exc:
        logger.debug("Leitura interrompida apos %d bytes: %s", len(buffer), describe_exception(exc))

    text = buffer.decode(encoding, errors="replace")
    if not text:
        return ""
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return "".join(line + "\n" for line in lines)


def describe_exception(err: Optional[BaseException]) -> str:
    """Retorna a mensagem do erro, o nome do tipo se nao houver mensagem, ou um sentinela para None."""
    if err is None:
        return NULL_EXCEPTION_TEXT
    message = str(err)
    return message if message else type(err).__name__


def append_formatted(buffer: Union[list, io.TextIOBase], fmt: str, *params: object) -> str:
    """Acrescenta `fmt % params` ao buffer (lista de strings ou stream de texto).

    Exemplo
    >>> parts = []
    >>> append_formatted(parts, "%s=%d", "n", 3)
    'n=3'
    >>> parts
    ['n=3']
    """
    piece = fmt % params
    if isinstance(buffer, list):
        buffer.append(piece)
    else:
        buffer.write(piece)
    return piece
