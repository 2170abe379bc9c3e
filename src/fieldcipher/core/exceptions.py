"""
Exceptions for fieldcipher
Every failure the library reports is a CryptoError, so callers have one general error catcher
"""

from typing import Optional


class CryptoError(Exception):
    # general container for errors
    kind = "CryptoError"

    def __init__(self, message: str = "", path: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        # dot path of the value being processed when the error occurred, if any
        self.path = path
        # envelope wire field at fault (iv, encryptedData, authTag), if any
        self.field = field

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__


class ConfigError(CryptoError):
    # raised when the secret, salt or kdf choice is not usable for key derivation
    pass


class InvalidCiphertextError(CryptoError):
    # raised when the envelope cannot be parsed or encryptedData is not hex
    pass


class InvalidIVError(CryptoError):
    # raised when the iv field is not hex or has the wrong length
    pass


class InvalidAuthTagError(CryptoError):
    # raised when the authTag field is not hex or has the wrong length
    pass


class EncryptionFailedError(CryptoError):
    # raised when the cipher could not produce an envelope
    pass


class DecryptionFailedError(CryptoError):
    # raised on tag mismatch or any other failure after the envelope parsed
    pass


class HashFailedError(CryptoError):
    # raised for an unknown algorithm or a digest failure
    pass


class UnsupportedTypeError(CryptoError):
    """Raised when traversal meets a value outside the supported value model."""

    def __init__(self, path: str, type_name: str):
        where = path or "<root>"
        super().__init__(f"Unsupported type {type_name} at {where}", path=path)
        self.type_name = type_name


def annotate(error: CryptoError, path: str) -> CryptoError:
    """Attach ``path`` to ``error`` unless a more specific one is already set."""
    if error.path is None:
        error.path = path
    return error
