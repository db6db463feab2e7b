"""
Encryption Errors

Exception types raised by the displacement and target building steps.
"""


class EncryptionError(Exception):
    """Base class for mesh encryption failures"""


class MissingGeometryError(EncryptionError, ValueError):
    """Raised when there is no base mesh or vertex buffer to work on"""


class InvalidKeyError(EncryptionError, ValueError):
    """Raised when a decryption key cannot produce a finite delta scale"""
