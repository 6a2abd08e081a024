from __future__ import annotations

from dataclasses import dataclass
from typing import Union

_ENCODINGS = ("base64", "hex", "raw")


@dataclass
class SignMessageUseCase:
    """Assina uma mensagem de texto com HMAC-SHA256."""

    checksum: "ChecksumService"

    def execute(self, key: str, message: str, encoding: str = "base64") -> Union[str, bytes]:
        """Codifica chave e mensagem com o encoding de texto do servico e gera o MAC.

        `encoding` define a saida: 'base64' (padrao), 'hex' ou 'raw' (bytes).
        """
        if encoding not in _ENCODINGS:
            raise ValueError(f"Encoding de saida invalido: {encoding!r} (use {', '.join(_ENCODINGS)})")
        text_encoding = self.checksum.text_encoding
        raw_key = key.encode(text_encoding) if isinstance(key, str) else key
        raw_message = message.encode(text_encoding)
        if encoding == "hex":
            return self.checksum.hmac_sha256_hex(raw_key, raw_message)
        if encoding == "raw":
            return self.checksum.hmac_sha256(raw_key, raw_message)
        return self.checksum.hmac_sha256_base64(raw_key, raw_message)
