import hashlib
import hmac

from razorpay_payments import sign, verify_signature

BODY = b'{"entity":"event","event":"payment.captured"}'


def test_sign_matches_hmac_sha256_hex():
    expected = hmac.new(b"whsec_test", BODY, hashlib.sha256).hexdigest()

    assert sign(BODY, "whsec_test") == expected


def test_sign_is_deterministic_and_lowercase():
    first = sign(BODY, "whsec_test")

    assert first == sign(BODY, "whsec_test")
    assert first == first.lower()
    assert len(first) == 64


def test_str_and_bytes_bodies_agree():
    assert sign(BODY.decode("utf-8"), "whsec_test") == sign(BODY, "whsec_test")


def test_single_byte_changes_alter_the_signature():
    signature = sign(BODY, "whsec_test")

    assert sign(BODY.replace(b"captured", b"capturee"), "whsec_test") != signature
    assert sign(BODY, "whsec_tesu") != signature


def test_verify_signature():
    signature = sign(BODY, "whsec_test")

    assert verify_signature(BODY, signature, "whsec_test")
    assert not verify_signature(BODY, signature.upper(), "whsec_test")
    assert not verify_signature(BODY, signature[:-1], "whsec_test")
    assert not verify_signature(BODY, "", "whsec_test")
    assert not verify_signature(BODY, None, "whsec_test")
