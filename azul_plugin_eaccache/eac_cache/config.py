"""Load masked search patterns from JSON config and locate them in data."""

import codecs
import json
import logging
from os import path

from .exceptions import InvalidArgumentError
from .memory import EXACT, find_pattern, parse_mask, parse_signature

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = path.join(path.dirname(__file__), "config.json")


def string_pattern_to_binary(pattern):
    """Convert pattern from JSON config file to bytes.

    Any escape sequences in the pattern are handled automatically.
    """
    return codecs.escape_decode(pattern.encode("utf-8"))[0]


def parse_entry(entry):
    """Convert a single config entry into a (pattern, mask) pair.

    An entry is either {"pattern": ..., "mask": ...}, where the mask defaults
    to all exact, or {"signature": "55 8B EC ?? 89"}.
    """
    if not isinstance(entry, dict):
        raise InvalidArgumentError(f"pattern entry must be an object, not {type(entry).__name__}")

    if "signature" in entry:
        return parse_signature(entry["signature"])

    if "pattern" not in entry:
        raise InvalidArgumentError(f"pattern entry {entry!r} has neither 'pattern' nor 'signature'")

    pattern = string_pattern_to_binary(entry["pattern"])
    mask = entry.get("mask", EXACT * len(pattern))
    parse_mask(mask)
    if len(mask) != len(pattern):
        raise InvalidArgumentError(
            f"pattern {pattern!r} is {len(pattern)} bytes but its mask {mask!r} is {len(mask)} characters"
        )
    return pattern, mask


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """Load config file that describes the patterns and their categories."""
    with open(config_path) as f:
        config = json.load(f)

    # JSON doesn't handle binary data, so patterns are escaped strings that get decoded here.
    processed_config = dict()
    for category, entries in config.items():
        processed_config[category] = [parse_entry(entry) for entry in entries]

    return processed_config


def locate_patterns(pattern_structure, data):
    """Search for the patterns, from the supplied structure, in the data.

    Yields (category, pattern, match_data, offset) for the first match of each pattern.
    """
    for category, patterns in pattern_structure.items():
        for pattern, mask in patterns:
            offset = find_pattern(data, len(data), pattern, mask)
            if offset is None:
                continue

            # Carve the actual data which the masked pattern matched on.
            match_data = bytes(data[offset : offset + len(pattern)])
            logger.debug("%s pattern matched at offset 0x%X", category, offset)
            yield (category, pattern, match_data, offset)
    return
