from __future__ import annotations

import argparse
import json
import logging

from digestkit.application.services.checksum_service import Algorithm, ChecksumService
from digestkit.application.services.errors import DigestError
from digestkit.application.usecases.hash_file_usecase import HashFileUseCase
from digestkit.application.usecases.sign_message_usecase import SignMessageUseCase
from digestkit.application.usecases.verify_checksum_usecase import VerifyChecksumUseCase
from digestkit.config import load_config, resolve_hmac_key
from digestkit.infra.strings import describe_exception
from digestkit.logging_config import setup_logging

logger = logging.getLogger(__name__)

_ALGORITHMS = [a.value for a in Algorithm]


def main(argv: list[str] | None = None) -> int:
    """Ponto de entrada da CLI digestkit.

    Exemplos
    - Hash de arquivos: `python -m digestkit.cli.digest_manager hash a.bin b.bin --algorithm md5`
    - Hash de texto: `python -m digestkit.cli.digest_manager hash-text "abc"`
    - HMAC: `python -m digestkit.cli.digest_manager hmac "mensagem" --key segredo --encoding hex`
    - Conferência: `python -m digestkit.cli.digest_manager verify a.bin <sha256 esperado>`
    """
    cfg = load_config()
    default_algorithm = cfg.default_algorithm.lower().replace("-", "")
    if default_algorithm not in _ALGORITHMS:
        default_algorithm = Algorithm.SHA256.value

    parser = argparse.ArgumentParser(description="digestkit - digests MD5/SHA-256 e HMAC-SHA256")
    sub = parser.add_subparsers(dest="command", required=True)

    hash_cmd = sub.add_parser("hash", help="Calcula o digest de um ou mais arquivos")
    hash_cmd.add_argument("paths", nargs="+", help="Arquivos a processar")
    hash_cmd.add_argument("--algorithm", choices=_ALGORITHMS, default=default_algorithm)

    hash_text = sub.add_parser("hash-text", help="Calcula o digest de um texto")
    hash_text.add_argument("text", help="Texto de entrada")
    hash_text.add_argument("--algorithm", choices=_ALGORITHMS, default=default_algorithm)

    hmac_cmd = sub.add_parser("hmac", help="Calcula o HMAC-SHA256 de uma mensagem")
    hmac_cmd.add_argument("message", help="Mensagem a assinar")
    hmac_cmd.add_argument("--key", help="Chave compartilhada (padrão: DIGEST_HMAC_KEY ou prompt)")
    hmac_cmd.add_argument("--encoding", choices=["base64", "hex"], default="base64")

    verify = sub.add_parser("verify", help="Confere um arquivo contra o digest esperado")
    verify.add_argument("path", help="Arquivo a conferir")
    verify.add_argument("expected", help="Digest esperado em hex")
    verify.add_argument("--algorithm", choices=_ALGORITHMS, default=default_algorithm)

    args = parser.parse_args(argv)

    setup_logging(cfg.log_level)
    checksum = ChecksumService(chunk_size=cfg.chunk_size, text_encoding=cfg.text_encoding)

    if args.command == "hash":
        usecase = HashFileUseCase(checksum=checksum)
        results = []
        for path in args.paths:
            try:
                digest = usecase.execute(path, args.algorithm)
                results.append({"file": path, "algorithm": args.algorithm, "digest": digest})
            except DigestError as exc:
                results.append({"file": path, "status": "error", "error": describe_exception(exc)})
        print(json.dumps(results, ensure_ascii=False, indent=2))
        return 0

    try:
        if args.command == "hash-text":
            print(checksum.digest_text(args.algorithm, args.text))
            return 0

        if args.command == "hmac":
            key = resolve_hmac_key(cfg, args.key)
            print(SignMessageUseCase(checksum=checksum).execute(key, args.message, args.encoding))
            return 0

        if args.command == "verify":
            ok = VerifyChecksumUseCase(checksum=checksum).execute(args.path, args.expected, args.algorithm)
            print("OK" if ok else "MISMATCH")
            return 0 if ok else 1
    except DigestError as exc:
        logger.error("%s falhou: %s", args.command, describe_exception(exc))
        print(f"ERRO - {describe_exception(exc)}")
        return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
