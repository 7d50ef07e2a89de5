"""Transform and hash EasyAntiCheat cache images.

The cache format is not protected with a standard cipher. Each byte is
instead rewritten based on its position and its neighbour, with every
addition and subtraction wrapping at 256. The two directions below are
not exact inverses of each other and are kept exactly as the client
implements them.
"""

import logging
from hashlib import sha1

from .exceptions import InvalidArgumentError
from .memory import validate_size

logger = logging.getLogger(__name__)


def _check_image(image, image_size):
    """Ensure image is writable and image_size lies within it."""
    if isinstance(image, memoryview):
        if image.readonly:
            raise InvalidArgumentError("image must be writable, got a read-only memoryview")
    elif not isinstance(image, bytearray):
        raise InvalidArgumentError(f"image must be a bytearray or writable memoryview, not {type(image).__name__}")
    validate_size(image, image_size, name="image_size")


def decrypt_cache(image, image_size):
    """Decrypt the first image_size bytes of a cache image in place.

    Works from the end of the image back to the start, so each byte is
    adjusted using its already decrypted successor. Images shorter than
    two bytes are left as is.
    """
    _check_image(image, image_size)
    if image_size < 2:
        return

    image[image_size - 1] = (image[image_size - 1] + 3 - 3 * image_size) & 0xFF
    for v in range(image_size - 2, 0, -1):
        image[v] = (image[v] - 3 * v - image[v + 1]) & 0xFF
    image[0] = (image[0] - image[1]) & 0xFF

    logger.debug("decrypted %d byte cache image", image_size)


def encrypt_cache(image, image_size):
    """Encrypt the first image_size bytes of a cache image in place.

    Works from the start of the image to the end, so each byte is adjusted
    using its successor before that successor is rewritten. Unlike
    decrypt_cache() there is no final step for the first byte, and two byte
    images only have their last byte adjusted.

    The successor of the final byte lies past image_size and counts as zero,
    as it does in the native client, which allocates its image buffers with
    zeroed slack past the cache data. Nothing past image_size is read.
    """
    _check_image(image, image_size)
    if image_size < 2:
        return

    image[image_size - 1] = (image[image_size - 1] + 3 - 3 * image_size) & 0xFF
    if image_size != 2:
        for v in range(image_size):
            successor = image[v + 1] if v + 1 < image_size else 0
            image[v] = (image[v] + 3 * v + successor) & 0xFF

    logger.debug("encrypted %d byte cache image", image_size)


def get_sha1_hash(buffer):
    """Return the hex SHA1 digest of a cache image, as the client computes it."""
    return sha1(buffer).hexdigest()
