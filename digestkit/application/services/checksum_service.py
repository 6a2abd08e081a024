from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from contextlib import closing
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from digestkit.application.ports.byte_source_port import ByteSource
from digestkit.application.services.errors import AlgorithmUnavailable, DigestError, InvalidKey, IOFailure
from digestkit.infra.streams import to_byte_source

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2048

_BYTES_TYPES = (bytes, bytearray, memoryview)


class Algorithm(str, Enum):
    """Algoritmos de digest suportados (valor = nome no hashlib)."""

    MD5 = "md5"
    SHA256 = "sha256"

    @classmethod
    def from_name(cls, name: Union["Algorithm", str]) -> "Algorithm":
        """Resolve nomes como 'SHA-256', 'sha256' ou 'MD5'.

        Exemplo
        >>> Algorithm.from_name("SHA-256") is Algorithm.SHA256
        True
        """
        if isinstance(name, Algorithm):
            return name
        normalized = str(name).strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == normalized:
                return member
        raise AlgorithmUnavailable(str(name), "nao suportado")


AlgorithmLike = Union[Algorithm, str]


@dataclass
class ChecksumService:
    """Servico responsavel pelo calculo de checksums e HMACs.

    Todas as falhas sao sinalizadas por excecoes de `DigestError`; nenhuma
    operacao devolve digest vazio ou parcial.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    text_encoding: str = "utf-8"

    def digest(self, algorithm: AlgorithmLike, data: bytes) -> bytes:
        """Calcula o digest bruto de um buffer em uma unica passada."""
        if data is None:
            raise TypeError("data nao pode ser None")
        hasher = self._new_hasher(algorithm)
        hasher.update(data)
        return hasher.digest()

    def digest_hex(self, algorithm: AlgorithmLike, data: bytes) -> str:
        """Calcula o digest (hex minusculo, dois caracteres por byte).

        Exemplo
        >>> ChecksumService().digest_hex("md5", b"")
        'd41d8cd98f00b204e9800998ecf8427e'
        """
        return self.digest(algorithm, data).hex()

    def digest_text(self, algorithm: AlgorithmLike, text: str) -> str:
        """Calcula o digest hex de um texto codificado com `text_encoding`."""
        if text is None:
            raise TypeError("text nao pode ser None")
        return self.digest_hex(algorithm, text.encode(self.text_encoding))

    def md5_bytes(self, data: bytes) -> str:
        """Calcula o hash MD5 (hex) para um buffer de bytes."""
        return self.digest_hex(Algorithm.MD5, data)

    def sha256_bytes(self, data: bytes) -> str:
        """Calcula o hash SHA-256 (hex) para um buffer de bytes."""
        return self.digest_hex(Algorithm.SHA256, data)

    def digest_stream(
        self,
        algorithm: AlgorithmLike,
        source: ByteSource,
        chunk_size: Optional[int] = None,
    ) -> str:
        """Calcula o digest hex lendo a fonte em blocos ate o fim.

        Aceita bytes, respostas urllib3 ou objetos file-like (ver
        `to_byte_source`). A fonte e fechada exatamente uma vez, com sucesso
        ou falha. Erros de leitura viram `IOFailure` encadeado com a causa
        original.
        """
        source = to_byte_source(source)
        size = self.chunk_size if chunk_size is None else chunk_size

        total = 0
        try:
            with closing(source):
                if size < 1:
                    raise ValueError(f"chunk_size deve ser >= 1 (recebido {size})")
                hasher = self._new_hasher(algorithm)
                try:
                    for chunk in iter(lambda: source.read(size), b""):
                        hasher.update(chunk)
                        total += len(chunk)
                except DigestError:
                    raise
                except Exception as exc:
                    logger.warning("Falha de leitura apos %d bytes: %s", total, exc)
                    raise IOFailure(f"Falha ao ler a fonte apos {total} bytes: {exc}") from exc
        except OSError as exc:
            # falha no close()
            raise IOFailure(f"Falha ao fechar a fonte: {exc}") from exc

        logger.debug("Digest %s calculado sobre %d bytes", hasher.name, total)
        return hasher.hexdigest()

    def digest_file(self, algorithm: AlgorithmLike, path: str) -> str:
        """Calcula o digest hex de um arquivo local por streaming."""
        resolved = Algorithm.from_name(algorithm)
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise IOFailure(f"Nao foi possivel abrir {path}: {exc}") from exc
        return self.digest_stream(resolved, handle)

    def hmac_sha256(self, key: bytes, message: bytes) -> bytes:
        """Calcula o HMAC-SHA256 de `message` com a chave compartilhada `key`."""
        if not isinstance(key, _BYTES_TYPES):
            raise InvalidKey(f"Chave HMAC deve ser bytes, recebido {type(key).__name__}")
        if len(key) == 0:
            raise InvalidKey("Chave HMAC vazia")
        if message is None:
            raise TypeError("message nao pode ser None")
        try:
            mac = hmac.new(bytes(key), digestmod=Algorithm.SHA256.value)
        except ValueError as exc:
            raise AlgorithmUnavailable("HmacSHA256", str(exc)) from exc
        mac.update(message)
        return mac.digest()

    def hmac_sha256_hex(self, key: bytes, message: bytes) -> str:
        """HMAC-SHA256 em hex minusculo."""
        return self.hmac_sha256(key, message).hex()

    def hmac_sha256_base64(self, key: bytes, message: bytes) -> str:
        """HMAC-SHA256 em Base64 padrao (com padding, sem quebra de linha)."""
        return base64.b64encode(self.hmac_sha256(key, message)).decode("ascii")

    @staticmethod
    def matches(expected_hex: str, actual_hex: str) -> bool:
        """Compara dois digests hex em tempo constante, ignorando caixa.

        Ambos os argumentos devem ser `str`; outros tipos geram TypeError.
        """
        if not isinstance(expected_hex, str) or not isinstance(actual_hex, str):
            raise TypeError("matches espera dois digests hex em str")
        try:
            expected = expected_hex.strip().lower().encode("ascii")
            actual = actual_hex.strip().lower().encode("ascii")
        except UnicodeEncodeError:
            return False
        return hmac.compare_digest(expected, actual)

    @staticmethod
    def _new_hasher(algorithm: AlgorithmLike):
        resolved = Algorithm.from_name(algorithm)
        try:
            return hashlib.new(resolved.value)
        except ValueError as exc:
            # FIPS e builds sem OpenSSL completo recusam md5
            raise AlgorithmUnavailable(resolved.value, str(exc)) from exc
