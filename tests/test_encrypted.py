import json
import struct

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from jsoncoerce.encrypted import Int64Encrypted, StringEncrypted
from jsoncoerce.passphrase import DecryptionError, passphrase_to_key, set_passphrase

PASSPHRASE = "password"
SOURCE_INT_VECTOR = (
    "0x02000000E16B019A1A1299744DEA2DD7B7A84A1A5569D8AAF5D5D09C21B7F871F4312D35"
    "89A97635FFDB997D297C39C233C14E95"
)
SOURCE_STRING_VECTOR = "0x02000000BF87541AB3E917E2B5AC21075FFD338CE45A59B994D53F05DECDE386EBC85BEB"


def _encrypted_hex(plaintext):
    key = passphrase_to_key(PASSPHRASE)
    iv = bytes(range(16))
    data = struct.pack("<IHH", 0xBAADF00D, 0, len(plaintext)) + plaintext
    pad = 16 - len(data) % 16
    data += bytes([pad]) * pad
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    raw = bytes([2, 0, 0, 0]) + iv + encryptor.update(data) + encryptor.finalize()
    return "0x" + raw.hex().upper()


@pytest.fixture(autouse=True)
def _passphrase():
    set_passphrase(PASSPHRASE)
    yield
    set_passphrase("")


def test_int_encrypted_from_document():
    document = '{"field": "' + _encrypted_hex(b"363301016") + '"}'
    field = json.loads(document)["field"]
    value = Int64Encrypted.from_json(json.dumps(field))
    assert value == 363301016
    assert value.to_json() == "363301016"


def test_int_source_vector_with_other_passphrase_fails():
    with pytest.raises(DecryptionError):
        Int64Encrypted.from_json(json.dumps(SOURCE_INT_VECTOR))


def test_int_plain_string():
    assert Int64Encrypted.from_json('"42"') == 42


def test_int_negative_plain_string():
    assert Int64Encrypted.from_json(b'"-17"') == -17


def test_int_unparsable_plain_string_is_zero():
    assert Int64Encrypted.from_json('"abc"') == 0


def test_int_out_of_range_plain_string_is_clamped():
    assert Int64Encrypted.from_json('"99999999999999999999"') == 9223372036854775807


def test_int_null_is_zero():
    assert Int64Encrypted.from_json("null") == 0


def test_int_json_number_rejected():
    with pytest.raises(ValueError):
        Int64Encrypted.from_json("5")


def test_int_bad_hex_rejected():
    with pytest.raises(ValueError):
        Int64Encrypted.from_json('"0x02zz"')


def test_int_encrypted_non_number_rejected():
    with pytest.raises(ValueError):
        Int64Encrypted.from_json(json.dumps(_encrypted_hex(b"abc")))


def test_int_scan_and_value():
    scanned = Int64Encrypted.scan(7)
    assert scanned == 7
    assert scanned.value() == 7
    assert str(scanned) == "7"


def test_int_scan_instance():
    assert Int64Encrypted.scan(Int64Encrypted(9)) == 9


@pytest.mark.parametrize("value", ["7", True, 7.0, None])
def test_int_scan_wrong_type(value):
    with pytest.raises(TypeError):
        Int64Encrypted.scan(value)


def test_string_decrypted_from_document():
    document = '{"field": "' + _encrypted_hex(b"060") + '"}'
    field = json.loads(document)["field"]
    assert StringEncrypted.from_json(json.dumps(field)) == "060"


def test_string_source_vector_with_other_passphrase_fails():
    with pytest.raises(DecryptionError):
        StringEncrypted.from_json(json.dumps(SOURCE_STRING_VECTOR))


def test_string_from_float():
    field = json.loads('{"field": 0.45}')["field"]
    assert StringEncrypted.from_json(json.dumps(field)) == "0.45"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5", "5"),
        ("123456", "123456"),
        ("1000000", "1e+06"),
        ("1234567", "1.234567e+06"),
        ("0.0001", "0.0001"),
        ("0.00001", "1e-05"),
        ("1.5e300", "1.5e+300"),
        ("-2.5", "-2.5"),
        ("-0.0", "-0"),
        ("0", "0"),
    ],
)
def test_string_number_formatting(text, expected):
    assert StringEncrypted.from_json(text) == expected


def test_string_normalises_nbsp_and_quotes():
    assert StringEncrypted.from_json(json.dumps("it's\u00a0here")) == 'it"s here'


def test_string_decrypted_text_is_normalised():
    hexed = _encrypted_hex("a\u00a0'b'".encode())
    assert StringEncrypted.from_json(json.dumps(hexed)) == 'a "b"'


def test_string_null_is_empty():
    assert StringEncrypted.from_json("null") == ""


@pytest.mark.parametrize("text", ["true", "[1]", '{"a": 1}', "1e400", "NaN"])
def test_string_rejects(text):
    with pytest.raises(ValueError):
        StringEncrypted.from_json(text)


def test_string_scan_and_value():
    assert StringEncrypted.scan("abc").value() == "abc"
    assert StringEncrypted.scan(b"xyz") == "xyz"
    assert StringEncrypted.scan(bytearray(b"q")) == "q"


def test_string_scan_wrong_type():
    with pytest.raises(TypeError):
        StringEncrypted.scan(3)