"""Identify binary containers by their leading signature bytes."""

from .exceptions import InvalidArgumentError

# DOS/PE executables start with "MZ"; a correctly decrypted cache image is one.
PE_SIGNATURE = b"MZ"


def verify_signature(buffer, signature):
    """Return True if buffer starts with the given signature bytes.

    A str signature is encoded as UTF-8 first. Buffers shorter than the
    signature never match, and an empty signature matches any buffer.
    """
    if isinstance(signature, str):
        signature = signature.encode("utf-8")
    elif isinstance(signature, (bytes, bytearray, memoryview)):
        signature = bytes(signature)
    else:
        raise InvalidArgumentError(f"signature must be bytes or str, not {type(signature).__name__}")

    return bytes(buffer[: len(signature)]) == signature
