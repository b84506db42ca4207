"""Signing, recovery and replay-protection tests for claim digests."""
from __future__ import annotations

import pytest
from eth_account import Account

from mphtlc_claims.digest import claim_typed_data
from mphtlc_claims.encoding import SECP256K1_N
from mphtlc_claims.errors import InvalidPrivateKey, InvalidSignature
from mphtlc_claims.signing import ClaimSignature, recover_signer, sign_digest, verify_signature


def test_signature_matches_golden_fixture(golden) -> None:
    signature = sign_digest(golden["signing_digest"], golden["private_key"])
    assert signature.hex == golden["signature"]
    assert len(signature.to_bytes()) == 65
    assert signature.v == 27


def test_signature_matches_eth_account_typed_data_signing(golden) -> None:
    typed = claim_typed_data(golden["lock_id"], golden["receiver"], golden["chain_id"], golden["contract"])
    expected = Account.sign_typed_data(golden["private_key"], full_message=typed)
    assert sign_digest(golden["signing_digest"], golden["private_key"]).to_bytes() == bytes(expected.signature)


def test_round_trip_recovers_signer(golden) -> None:
    account = Account.create()
    signature = sign_digest(golden["signing_digest"], account.key)
    assert recover_signer(golden["signing_digest"], signature) == account.address
    assert recover_signer(golden["signing_digest"], signature.hex) == account.address
    assert recover_signer(golden["signing_digest"], signature.to_bytes()) == account.address


def test_signing_is_deterministic(golden) -> None:
    first = sign_digest(golden["signing_digest"], golden["private_key"])
    second = sign_digest(bytes.fromhex(golden["signing_digest"][2:]), golden["private_key"][2:])
    assert first == second


@pytest.mark.parametrize("section", ["other_chain", "other_contract"])
def test_replayed_signature_does_not_recover_signer(golden, section) -> None:
    replay_digest = golden[section]["signing_digest"]
    recovered = recover_signer(replay_digest, golden["signature"])
    assert recovered != golden["signer"]
    assert not verify_signature(replay_digest, golden["signature"], golden["signer"])


@pytest.mark.parametrize("section", ["other_chain", "other_contract"])
def test_signatures_for_other_domains_match_fixture(golden, section) -> None:
    variant = golden[section]
    signature = sign_digest(variant["signing_digest"], golden["private_key"])
    assert signature.hex == variant["signature"]
    assert signature.hex != golden["signature"]


def test_verify_signature_accepts_lowercase_expected_signer(golden) -> None:
    assert verify_signature(golden["signing_digest"], golden["signature"], golden["signer"].lower())


@pytest.mark.parametrize("key", [None, "", "0x" + "00" * 32, "0x1234", "not-a-key"])
def test_sign_digest_rejects_bad_keys(golden, key) -> None:
    with pytest.raises(InvalidPrivateKey):
        sign_digest(golden["signing_digest"], key)


def test_sign_digest_rejects_short_digest(golden) -> None:
    with pytest.raises(InvalidSignature):
        sign_digest(b"\x01" * 31, golden["private_key"])


def test_claim_signature_parsing(golden) -> None:
    signature = ClaimSignature.from_hex(golden["signature"])
    raw = bytes.fromhex(golden["signature"][2:])
    assert signature.to_bytes() == raw
    assert signature.recovery_id == 0

    legacy = ClaimSignature.from_bytes(raw[:64] + b"\x00")
    assert legacy == signature

    payload = signature.as_dict()
    assert payload["signature"] == golden["signature"]
    assert payload["r"] == "0x" + golden["signature"][2:66]
    assert payload["v"] == 27


@pytest.mark.parametrize(
    "value",
    [
        "0x" + "11" * 64,
        "0x" + "11" * 66,
        "0xnothex",
        b"",
        12345,
    ],
)
def test_malformed_signatures_are_rejected(golden, value) -> None:
    with pytest.raises(InvalidSignature):
        recover_signer(golden["signing_digest"], value)


def test_bad_recovery_byte_is_rejected(golden) -> None:
    raw = bytes.fromhex(golden["signature"][2:])
    with pytest.raises(InvalidSignature):
        ClaimSignature.from_bytes(raw[:64] + b"\x1d")


@pytest.mark.parametrize(
    "r,s",
    [(0, 1), (1, 0), (SECP256K1_N, 1), (1, SECP256K1_N // 2 + 1)],
)
def test_out_of_range_scalars_are_rejected(r, s) -> None:
    with pytest.raises(InvalidSignature):
        ClaimSignature(r=r, s=s, v=27)


def test_point_not_on_curve_is_rejected(golden) -> None:
    # x = 5 has no matching y on secp256k1.
    signature = ClaimSignature(r=5, s=1, v=27)
    with pytest.raises(InvalidSignature):
        recover_signer(golden["signing_digest"], signature)
