# jsoncoerce

Small value types for JSON documents and database rows whose fields do not
arrive in the shape you want. Each type is built from the raw JSON text of one
field (`from_json`) or from a database value (`scan`), and most can be turned
back into JSON text (`to_json`) or a database parameter (`value`).

## Installation

```
pip install jsoncoerce
```

The only runtime dependency is `cryptography`, used for AES decryption.

## Types

| Type | Module | JSON form read | Built on |
| --- | --- | --- | --- |
| `DateFromInt` | `jsoncoerce.dates` | `20230107` (bare integer `YYYYMMDD`) | frozen dataclass holding `moment` |
| `DateTimeFromDateTime` | `jsoncoerce.dates` | `"2017-06-09 00:00:00.0"` | frozen dataclass holding `moment` |
| `Int64Encrypted` | `jsoncoerce.encrypted` | `"0x02..."` or `"42"` | `int` |
| `StringEncrypted` | `jsoncoerce.encrypted` | `"0x02..."`, `"text"` or `0.45` | `str` |
| `StringFromInt` | `jsoncoerce.string_from_int` | any raw JSON text, e.g. `123` | `str` |

### Dates

`DateFromInt` and `DateTimeFromDateTime` hold a timezone-aware `datetime` in
their `moment` field (a naive datetime is taken as UTC). The default is the
zero instant `ZERO_TIME`, 0001-01-01 00:00:00 UTC, and `is_zero` tells
whether a value is that instant.

- `DateFromInt.to_json()` writes the date as an unquoted `YYYYMMDD` number.
  `from_json` accepts only integer text.
- `DateTimeFromDateTime.to_json()` writes a quoted string with tenths of a
  second. `from_json` reads such a string; an empty string or `null` gives
  the zero instant.
- `scan` accepts a `datetime`, RFC 3339 text, or text in the type's own
  layout (`DateTimeFromDateTime.scan` also accepts another instance).
  Anything else raises `TypeError`.
- `value()` returns RFC 3339 text to whole seconds (UTC written as `Z`), or
  `None` for the zero instant.

```python
from jsoncoerce.dates import DateFromInt, DateTimeFromDateTime

date = DateFromInt.from_json("20230107")
date.to_json()        # '20230107'
date.value()          # '2023-01-07T00:00:00Z'

stamp = DateTimeFromDateTime.from_json('"2017-06-09 00:00:00.0"')
stamp.to_json()       # '"2017-06-09 00:00:00.0"'
DateTimeFromDateTime.from_json('""').is_zero   # True
```

### Numeric strings

`StringFromInt.from_json` keeps the raw JSON text exactly as given.
`to_json()` writes it back as an integer; the text `null` is written as `0`,
and text that is not a 64-bit integer raises `ValueError`.

```python
from jsoncoerce.string_from_int import StringFromInt

StringFromInt.from_json("456").to_json()   # '456'
StringFromInt.from_json("null").to_json()  # '0'
```

### Encrypted fields

Strings beginning with `0x02` are taken as hex-encoded version 2 (AES)
passphrase ciphertext and decrypted with a passphrase set once for the
process:

```python
from jsoncoerce.passphrase import set_passphrase
from jsoncoerce.encrypted import Int64Encrypted, StringEncrypted

set_passphrase("secret")

number = Int64Encrypted.from_json('"0x02000000..."')
text = StringEncrypted.from_json('"0x02000000..."')
```

- `Int64Encrypted.from_json` expects a JSON string (`null` counts as an
  empty string). Decrypted text must be a 64-bit integer, or `ValueError` is
  raised. Plain text that is not an integer gives `0`; an integer outside the
  64-bit range is clamped. `to_json()` writes the bare integer, `value()`
  returns it as `int`, and `scan` accepts only integers.
- `StringEncrypted.from_json` accepts a JSON string or number. Numbers are
  written as their shortest text (`0.45` becomes `"0.45"`, with exponent form
  outside 1e-4 to 1e6). Text, after any decryption, has non-breaking spaces
  turned into spaces and `'` turned into `"`. `scan` accepts `str` or bytes;
  `value()` returns the plain string.

Ciphertext that is empty, not version 2, not a whole number of AES blocks,
or whose decrypted header does not check out raises
`jsoncoerce.passphrase.DecryptionError` (a `ValueError`). When you hold the
raw bytes yourself, `decrypt_by_passphrase(ciphertext)` decrypts them with
the current passphrase, and `passphrase_to_key(passphrase)` returns the
AES-256 key: the SHA-256 digest of the UTF-16LE encoded passphrase.

## What it does not do

There is no command-line tool, and nothing walks a whole JSON document or
maps fields onto a record: you call `from_json` for each field's raw text
yourself. Encryption is not offered, only decryption of version 2
ciphertext without an authenticator.

## Running the tests

```
pip install "jsoncoerce[test]"
pytest
```