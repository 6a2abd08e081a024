from __future__ import annotations

from dataclasses import dataclass

from digestkit.application.services.checksum_service import Algorithm, AlgorithmLike


@dataclass
class HashFileUseCase:
    """Caso de uso para calcular o digest de um arquivo local."""

    checksum: "ChecksumService"

    def execute(self, file_path: str, algorithm: AlgorithmLike = Algorithm.SHA256) -> str:
        """Le o arquivo em blocos e retorna o digest em hex."""
        return self.checksum.digest_file(algorithm, file_path)
