from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from digestkit.application.services.checksum_service import DEFAULT_CHUNK_SIZE
from digestkit.infra.strings import is_blank, parse_int_or

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Configuração da aplicação carregada do ambiente/.env.

    Exemplo
    >>> from digestkit.config import load_config
    >>> cfg = load_config()
    >>> cfg.chunk_size >= 1
    True
    """
    chunk_size: int
    text_encoding: str
    default_algorithm: str
    hmac_key: Optional[str]

    log_level: str


def load_config(env_path: Optional[Path] = None) -> Config:
    """Carrega a configuração (lendo .env se presente).

    Exemplo
    >>> cfg = load_config()
    >>> isinstance(cfg.text_encoding, str)
    True
    """
    _load_env_file(env_path)
    chunk_size = parse_int_or(os.getenv("DIGEST_CHUNK_SIZE"), DEFAULT_CHUNK_SIZE)
    hmac_key = os.getenv("DIGEST_HMAC_KEY")

    return Config(
        chunk_size=max(1, chunk_size),
        text_encoding=_getenv_first(["DIGEST_TEXT_ENCODING"], "utf-8"),
        default_algorithm=_getenv_first(["DIGEST_ALGORITHM"], "sha256"),
        hmac_key=None if is_blank(hmac_key) else hmac_key,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def _load_env_file(env_path: Optional[Path] = None, filename: str = ".env") -> None:
    """Carrega variáveis de um arquivo .env simples (KEY=VALUE).

    Variáveis já definidas no ambiente têm precedência.

    Exemplo
    >>> _load_env_file()  # silencioso quando não existe
    """
    if env_path is None:
        env_path = Path(__file__).resolve().parents[1] / filename
    if not env_path.exists():
        return
    try:
        content = env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        # carregamento best-effort
        logger.debug("Ignorando %s: %s", env_path, exc)
        return
    for line in content.splitlines():
        line = line.lstrip("\ufeff").strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k:
            os.environ.setdefault(k, v)


def _getenv_first(names: list[str], default: str) -> str:
    """Retorna o primeiro valor não vazio entre variáveis possíveis.

    Exemplo
    >>> _getenv_first(['__NOTSET__'], 'x')
    'x'
    """
    for n in names:
        v = os.getenv(n)
        if v is not None and v != "":
            return v
    return default


_PROMPT_CACHE: dict[str, str] = {}


def resolve_hmac_key(config: Config, explicit: Optional[str] = None) -> str:
    """Retorna a chave HMAC: argumento explícito, Config ou prompt mascarado."""
    if not is_blank(explicit):
        return explicit  # type: ignore[return-value]
    if config.hmac_key is not None:
        return config.hmac_key
    return _prompt_credential(cache_key="hmac_key", prompt="Chave HMAC")


def _prompt_credential(cache_key: str, prompt: str) -> str:
    """Pede o valor de forma mascarada; apenas valores digitados ficam em cache."""
    if cache_key in _PROMPT_CACHE:
        return _PROMPT_CACHE[cache_key]

    if not sys.stdin.isatty():
        raise RuntimeError(
            f"Entrada requerida para '{prompt}', mas o modo não-interativo não permite coleta. "
            "Defina as variáveis de ambiente apropriadas para execução automatizada."
        )

    value = _prompt_secret(prompt)
    _PROMPT_CACHE[cache_key] = value
    return value


def _prompt_secret(prompt: str) -> str:
    while True:
        value = _masked_input(f"{prompt}: ")
        if value:
            return value
        print("Valor obrigatório. Tente novamente.")


def _masked_input(prompt: str) -> str:
    try:
        import msvcrt  # type: ignore[attr-defined]
    except ImportError:
        msvcrt = None

    if msvcrt is not None:
        print(prompt, end="", flush=True)
        buffer: list[str] = []
        while True:
            ch = msvcrt.getwch()
            if ch in ("\r", "\n"):
                print()
                break
            if ch == "\003":  # Ctrl+C
                raise KeyboardInterrupt
            if ch == "\b":
                if buffer:
                    buffer.pop()
                    print("\b \b", end="", flush=True)
                continue
            buffer.append(ch)
            print("*", end="", flush=True)
        return "".join(buffer)

    # POSIX
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        sys.stdout.write(prompt)
        sys.stdout.flush()
        buffer = []
        while True:
            ch = sys.stdin.read(1)
            if ch in ("\n", "\r"):
                sys.stdout.write("\r\n")
                sys.stdout.flush()
                break
            if ch == "\x03":  # Ctrl+C
                raise KeyboardInterrupt
            if ch in ("\x7f", "\b"):
                if buffer:
                    buffer.pop()
                    sys.stdout.write("\b \b")
                    sys.stdout.flush()
                continue
            buffer.append(ch)
            sys.stdout.write("*")
            sys.stdout.flush()
        return "".join(buffer)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
