"""Locate masked byte patterns within binary buffers.

Patterns are paired with a mask string of the same length, where each
character marks the corresponding pattern byte as either exact (``x``) or
wildcard (``?``), e.g. ``"xxx??xxx"``.
"""

import logging
import re
from string import hexdigits

from .exceptions import InvalidArgumentError, OutOfRangeError

logger = logging.getLogger(__name__)

EXACT = "x"
WILDCARD = "?"


def validate_size(buffer, size, name="size"):
    """Ensure a declared logical size fits inside the supplied buffer.

    Raises before anything is read, so callers never touch memory past the end of the buffer.
    """
    if not isinstance(size, int) or isinstance(size, bool):
        raise InvalidArgumentError(f"{name} must be an int, not {type(size).__name__}")
    if size < 0:
        raise InvalidArgumentError(f"{name} must not be negative (got {size})")
    if size > len(buffer):
        raise OutOfRangeError(f"{name} {size} is past the end of a {len(buffer)} byte buffer")


def parse_mask(mask):
    """Validate a mask literal and return one boolean per position, True where the byte must match exactly."""
    if not isinstance(mask, str):
        raise InvalidArgumentError(f"mask must be a str of '{EXACT}' and '{WILDCARD}', not {type(mask).__name__}")

    exact = []
    for index, marker in enumerate(mask):
        if marker == EXACT:
            exact.append(True)
        elif marker == WILDCARD:
            exact.append(False)
        else:
            raise InvalidArgumentError(f"mask character {marker!r} at position {index} is not '{EXACT}' or '{WILDCARD}'")

    return tuple(exact)


def pattern_to_binary(pattern):
    """Return the pattern as bytes.

    Strings are encoded one byte per character (latin-1), so "\\x8b" in a str pattern means the byte 0x8B.
    """
    if isinstance(pattern, str):
        try:
            return pattern.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InvalidArgumentError(f"pattern contains a character that is not a single byte: {e}") from e
    if isinstance(pattern, (bytes, bytearray, memoryview)):
        return bytes(pattern)
    raise InvalidArgumentError(f"pattern must be bytes or str, not {type(pattern).__name__}")


def check_mask(window, pattern, mask):
    """Compare a window of data against a pattern, ignoring wildcard positions.

    The window and pattern must each be at least as long as the mask. Comparison stops at the first mismatch.
    """
    if len(window) < len(mask) or len(pattern) < len(mask):
        raise InvalidArgumentError(
            f"window ({len(window)} bytes) and pattern ({len(pattern)} bytes) must cover the {len(mask)} character mask"
        )
    for index, marker in enumerate(mask):
        if marker == EXACT and window[index] != pattern[index]:
            return False
    return True


def build_mask_regex(pattern, mask):
    """Build a regex which matches the pattern, with any byte allowed at wildcard positions.

    Must be compiled with re.DOTALL so that wildcards also match newline bytes.
    """
    regex = b""
    for index, marker in enumerate(mask):
        # Wildcard positions match anything.
        if marker == WILDCARD:
            regex += b"."
        # Hex encode all exact bytes to avoid forming an invalid regex.
        else:
            regex += b"\\x%02X" % pattern[index]
    return regex


def find_pattern(buffer, size, pattern, mask):
    """Return the offset of the first match of a masked pattern within the first `size` bytes of buffer.

    Every start offset whose window ends at or before `size` is considered, lowest first.
    An empty pattern matches at offset 0. Returns None if the pattern does not occur.
    """
    pattern = pattern_to_binary(pattern)
    parse_mask(mask)
    if len(pattern) != len(mask):
        raise InvalidArgumentError(
            f"pattern is {len(pattern)} bytes but mask is {len(mask)} characters; they must be the same length"
        )
    validate_size(buffer, size)

    pattern_len = len(pattern)
    if size < pattern_len:
        return None

    # Bounding the search at size keeps every candidate window inside the declared region.
    match = re.compile(build_mask_regex(pattern, mask), flags=re.DOTALL).search(buffer, 0, size)
    if match is None:
        return None

    offset = match.start()
    # The regex result is just a candidate which is confirmed against the mask.
    if not check_mask(match.group(0), pattern, mask):
        return None

    logger.debug("pattern of %d bytes found at offset 0x%X", pattern_len, offset)
    return offset


def parse_signature(signature):
    """Convert an IDA-style hex signature into a (pattern, mask) pair.

    Tokens are whitespace separated hex bytes; "?" or "??" marks a wildcard byte,
    which is stored as 0x00 in the pattern. For example "55 8B EC ?? 89" gives
    (b"\\x55\\x8b\\xec\\x00\\x89", "xxx?x").
    """
    if not isinstance(signature, str):
        raise InvalidArgumentError(f"signature must be a str, not {type(signature).__name__}")

    pattern = bytearray()
    mask = ""
    for token in signature.split():
        if token in ("?", "??"):
            pattern.append(0)
            mask += WILDCARD
            continue
        if len(token) != 2 or any(c not in hexdigits for c in token):
            raise InvalidArgumentError(f"signature token {token!r} is not a single hex byte")
        pattern.append(int(token, 16))
        mask += EXACT

    if not mask:
        raise InvalidArgumentError("signature is empty")

    return bytes(pattern), mask
