import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart(session):
    # Garante que o pacote digestkit seja importável sem instalação
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


@pytest.fixture
def clean_env(monkeypatch):
    """Isola os.environ das variáveis DIGEST_* e LOG_LEVEL e limpa o cache de prompts."""
    from digestkit import config

    isolated = {
        k: v for k, v in os.environ.items() if not k.startswith("DIGEST_") and k != "LOG_LEVEL"
    }
    monkeypatch.setattr(os, "environ", isolated)
    monkeypatch.setattr(config, "_PROMPT_CACHE", {})
    return isolated
