"""Tests for the sign_claim and verify_claim command-line scripts."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from mphtlc_claims.config import SignerSettings


def _settings(golden, deployed_json: str = "./configs/deployed.json", signer_pk=None) -> SignerSettings:
    return SignerSettings(
        signer_pk=signer_pk if signer_pk is not None else golden["private_key"],
        chain_id=golden["chain_id"],
        signer_url=None,
        deployed_json=deployed_json,
    )


def _claim_args(golden) -> list[str]:
    return ["--lock-id", golden["lock_id"], "--receiver", golden["receiver"]]


def test_sign_claim_prints_signature(monkeypatch: pytest.MonkeyPatch, capsys, golden) -> None:
    import scripts.sign_claim as cli

    monkeypatch.setattr(cli, "load_settings", lambda: _settings(golden))

    assert cli.main(_claim_args(golden) + ["--contract", golden["contract"]]) == 0
    assert capsys.readouterr().out.strip() == golden["signature"]


def test_sign_claim_reads_contract_from_deployment(
    monkeypatch: pytest.MonkeyPatch, capsys, golden, tmp_path: Path
) -> None:
    import scripts.sign_claim as cli

    deployed = tmp_path / "deployed.json"
    deployed.write_text(json.dumps({"token": "0x" + "aa" * 20, "htlc": golden["contract"]}), encoding="utf-8")
    monkeypatch.setattr(cli, "load_settings", lambda: _settings(golden, str(deployed)))

    assert cli.main(_claim_args(golden) + ["--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["verifying_contract"] == golden["contract"]
    assert payload["signature"] == golden["signature"]
    assert payload["signer"] == golden["signer"]


def test_sign_claim_chain_override_changes_signature(monkeypatch: pytest.MonkeyPatch, capsys, golden) -> None:
    import scripts.sign_claim as cli

    monkeypatch.setattr(cli, "load_settings", lambda: _settings(golden))

    args = _claim_args(golden) + ["--contract", golden["contract"], "--chain-id", "1"]
    assert cli.main(args) == 0
    assert capsys.readouterr().out.strip() == golden["other_chain"]["signature"]


@pytest.mark.parametrize(
    "extra,message",
    [
        (["--contract", "0x1234"], "verifying contract"),
        (["--contract", "0x" + "00" * 19 + "01", "--chain-id", "0"], "chain id"),
        ([], "deployment file not found"),
    ],
)
def test_sign_claim_reports_errors(monkeypatch: pytest.MonkeyPatch, capsys, golden, extra, message) -> None:
    import scripts.sign_claim as cli

    monkeypatch.setattr(cli, "load_settings", lambda: _settings(golden))

    assert cli.main(_claim_args(golden) + extra) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert message in captured.err


def test_sign_claim_requires_key(monkeypatch: pytest.MonkeyPatch, capsys, golden) -> None:
    import scripts.sign_claim as cli

    monkeypatch.setattr(cli, "load_settings", lambda: _settings(golden, signer_pk=""))

    assert cli.main(_claim_args(golden) + ["--contract", golden["contract"]]) == 1
    assert "SIGNER_PK" in capsys.readouterr().err


def test_verify_claim_reports_signer(capsys, golden) -> None:
    import scripts.verify_claim as cli

    args = _claim_args(golden) + [
        "--chain-id",
        str(golden["chain_id"]),
        "--contract",
        golden["contract"],
        "--signature",
        golden["signature"],
        "--expected",
        golden["signer"].lower(),
        "--json",
    ]
    assert cli.main(args) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "signing_digest": golden["signing_digest"],
        "signer": golden["signer"],
        "expected": golden["signer"],
        "matches": True,
    }


def test_verify_claim_fails_on_cross_chain_replay(capsys, golden) -> None:
    import scripts.verify_claim as cli

    args = _claim_args(golden) + [
        "--chain-id",
        "1",
        "--contract",
        golden["contract"],
        "--signature",
        golden["signature"],
        "--expected",
        golden["signer"],
    ]
    assert cli.main(args) == 1
    captured = capsys.readouterr()
    assert captured.out.strip() != golden["signer"]
    assert "does not match" in captured.err


def test_verify_claim_rejects_malformed_signature(capsys, golden) -> None:
    import scripts.verify_claim as cli

    args = _claim_args(golden) + [
        "--chain-id",
        str(golden["chain_id"]),
        "--contract",
        golden["contract"],
        "--signature",
        "0x1234",
    ]
    assert cli.main(args) == 1
    assert "signature must be 65 bytes" in capsys.readouterr().err
