from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from digestkit.application.services.checksum_service import Algorithm, ChecksumService
from digestkit.application.services.errors import IOFailure
from digestkit.application.usecases.verify_checksum_usecase import VerifyChecksumUseCase


def test_execute_accepts_matching_digest(tmp_path: Path) -> None:
    target = tmp_path / "app.apk"
    payload = b"PK\x03\x04" + b"\x00" * 4096
    target.write_bytes(payload)

    usecase = VerifyChecksumUseCase(checksum=ChecksumService())

    assert usecase.execute(str(target), hashlib.md5(payload).hexdigest().upper(), Algorithm.MD5) is True
    assert usecase.execute(str(target), hashlib.sha256(payload).hexdigest()) is True


def test_execute_rejects_mismatch(tmp_path: Path) -> None:
    target = tmp_path / "app.apk"
    target.write_bytes(b"conteudo")

    usecase = VerifyChecksumUseCase(checksum=ChecksumService())

    assert usecase.execute(str(target), hashlib.sha256(b"outro").hexdigest()) is False


def test_execute_propagates_io_failure(tmp_path: Path) -> None:
    usecase = VerifyChecksumUseCase(checksum=ChecksumService())

    with pytest.raises(IOFailure):
        usecase.execute(str(tmp_path / "inexistente.apk"), "00")
