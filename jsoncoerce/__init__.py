"""Value types for dates, encrypted fields and numeric strings in JSON and database values."""

__version__ = "0.1.0"
__all__ = ["dates", "encrypted", "passphrase", "string_from_int"]