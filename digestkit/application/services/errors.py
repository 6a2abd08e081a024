from __future__ import annotations


class DigestError(Exception):
    """Erro base das operacoes de digest/HMAC."""


class AlgorithmUnavailable(DigestError):
    """O algoritmo solicitado nao esta disponivel no runtime."""

    def __init__(self, algorithm: str, reason: str | None = None) -> None:
        self.algorithm = algorithm
        message = f"Algoritmo indisponivel: {algorithm}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidKey(DigestError):
    """Chave HMAC ausente, vazia ou de tipo invalido."""


class IOFailure(DigestError):
    """Falha de leitura da fonte de bytes; a causa fica em __cause__."""
