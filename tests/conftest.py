"""Shared fixtures for the claim signing test suite."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

_FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def golden() -> Dict[str, Any]:
    """Vectors for the Sepolia scenario, captured once against an independent EIP-712 signer."""

    return json.loads((_FIXTURES / "claim_golden.json").read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def isolated_signer_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's .env and exported keys out of the tests."""

    for key in ("SIGNER_PK", "CHAIN_ID", "TSS_SIGNER_URL", "DEPLOYED_JSON", "LOG_LEVEL"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
