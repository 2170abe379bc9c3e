"""
End-to-end round trips through encrypt(config) and decrypt(config).
"""

import copy
import json

import pytest

from fieldcipher import Config, DecryptionFailedError, decrypt, encrypt


@pytest.fixture(scope="module")
def ops():
    config = Config(secret="correct horse battery staple 1234", salt="sixteen-byte-slt", context=["orders", "v1"])
    return encrypt(config), decrypt(config)


DOCUMENT = {
    "id": 1001,
    "customer": {
        "name": "Ana Silva",
        "email": "ana@example.com",
        "address": {"street": "Rua Augusta 1", "city": "Lisboa", "geo": [38.71, -9.13]},
        "vip": True,
    },
    "items": [{"sku": "A-1", "qty": 2}, {"sku": "B-7", "qty": 1}],
    "notes": None,
    "total": 59.9,
    "currency": "EUR",
    "unicode": "ação 🔒",
}

PATH_SETS = [
    [],
    ["id"],
    ["customer.email"],
    ["customer.address.city", "customer.address.geo"],
    ["customer.address"],
    ["customer", "customer.email"],
    ["items"],
    ["items.0.sku"],
    ["notes", "total", "unicode", "customer.vip"],
    ["missing", "customer.missing.deeper"],
    None,
]


@pytest.mark.parametrize("paths", PATH_SETS)
def test_roundtrip(ops, paths):
    enc, dec = ops
    original = copy.deepcopy(DOCUMENT)
    sealed = enc.from_object(DOCUMENT, paths)
    assert DOCUMENT == original
    assert dec.from_object(sealed, paths) == DOCUMENT


def test_unselected_fields_are_untouched(ops):
    enc, _ = ops
    sealed = enc.from_object(DOCUMENT, ["customer.email"])
    assert sealed["customer"]["name"] == "Ana Silva"
    assert sealed["customer"]["address"] == DOCUMENT["customer"]["address"]
    assert sealed["items"] == DOCUMENT["items"]
    assert json.loads(sealed["customer"]["email"]).keys() == {"iv", "encryptedData", "authTag"}


def test_identical_leaves_get_distinct_ciphertexts(ops):
    enc, dec = ops
    value = {"a": "same", "b": "same"}
    sealed = enc.from_object(value)
    assert sealed["a"] != sealed["b"]
    assert dec.from_object(sealed) == value


def test_tampered_field_aborts_whole_decryption(ops):
    enc, dec = ops
    sealed = enc.from_object(DOCUMENT, ["id", "customer.email"])
    envelope = json.loads(sealed["customer"]["email"])
    tag = envelope["authTag"]
    envelope["authTag"] = ("0" if tag[0] != "0" else "1") + tag[1:]
    sealed["customer"]["email"] = json.dumps(envelope)
    with pytest.raises(DecryptionFailedError) as info:
        dec.from_object(sealed, ["id", "customer.email"])
    assert info.value.path == "customer.email"


def test_argon2id_config_roundtrip():
    config = Config(secret="a" * 32, salt="b" * 16, context=["x"], kdf="argon2id")
    sealed = encrypt(config).from_object({"secret": {"pin": 1234}}, ["secret.pin"])
    assert decrypt(config).from_object(sealed, ["secret.pin"]) == {"secret": {"pin": 1234}}
