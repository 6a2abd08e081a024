from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> int:
    """Configura logging básico para a aplicação e retorna o nível numérico.

    Níveis desconhecidos caem para INFO.

    Exemplo
    >>> setup_logging('DEBUG')
    10
    >>> logging.getLogger('digestkit').debug('mensagem de debug')
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, level.strip().upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.WARNING))
    return numeric_level
