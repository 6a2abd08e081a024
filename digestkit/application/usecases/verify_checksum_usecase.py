from __future__ import annotations

import logging
from dataclasses import dataclass

from digestkit.application.services.checksum_service import Algorithm, AlgorithmLike

logger = logging.getLogger(__name__)


@dataclass
class VerifyChecksumUseCase:
    """Confere se um arquivo local corresponde ao digest esperado."""

    checksum: "ChecksumService"

    def execute(
        self,
        file_path: str,
        expected: str,
        algorithm: AlgorithmLike = Algorithm.SHA256,
    ) -> bool:
        """Retorna True quando o digest do arquivo bate com `expected`.

        Falhas de leitura ou algoritmo indisponivel propagam como `DigestError`.
        """
        actual = self.checksum.digest_file(algorithm, file_path)
        ok = self.checksum.matches(expected, actual)
        if not ok:
            logger.info("Checksum divergente para %s: esperado=%s obtido=%s", file_path, expected, actual)
        return ok
