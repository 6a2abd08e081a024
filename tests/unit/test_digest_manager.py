from __future__ import annotations

import hashlib
import json
from pathlib import Path

from digestkit.cli.digest_manager import main

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"


def test_hash_command_reports_digest_and_errors(clean_env, tmp_path: Path, capsys) -> None:
    target = tmp_path / "sample.bin"
    target.write_bytes(b"example-bytes")
    missing = tmp_path / "missing.bin"

    code = main(["hash", str(target), str(missing), "--algorithm", "md5"])

    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output[0] == {
        "file": str(target),
        "algorithm": "md5",
        "digest": hashlib.md5(b"example-bytes").hexdigest(),
    }
    assert output[1]["file"] == str(missing)
    assert output[1]["status"] == "error"


def test_hash_text_uses_configured_default_algorithm(clean_env, monkeypatch, capsys) -> None:
    monkeypatch.setenv("DIGEST_ALGORITHM", "MD5")

    assert main(["hash-text", ""]) == 0
    assert capsys.readouterr().out.strip() == EMPTY_MD5


def test_hmac_command_with_explicit_key(clean_env, capsys) -> None:
    code = main(["hmac", "what do ya want for nothing?", "--key", "Jefe", "--encoding", "hex"])

    assert code == 0
    assert capsys.readouterr().out.strip() == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


def test_verify_command_exit_codes(clean_env, tmp_path: Path, capsys) -> None:
    target = tmp_path / "sample.bin"
    target.write_bytes(b"")

    assert main(["verify", str(target), EMPTY_MD5, "--algorithm", "md5"]) == 0
    assert capsys.readouterr().out.strip() == "OK"

    assert main(["verify", str(target), "00" * 16, "--algorithm", "md5"]) == 1
    assert capsys.readouterr().out.strip() == "MISMATCH"


def test_verify_command_missing_file_returns_error_code(clean_env, tmp_path: Path, capsys) -> None:
    code = main(["verify", str(tmp_path / "missing.bin"), EMPTY_MD5])

    assert code == 2
    assert capsys.readouterr().out.startswith("ERRO - ")
