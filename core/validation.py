# =============================================================================
# core/validation.py  —  Input checks run before any network traffic
# =============================================================================
#
# Two checks guard the webhook:
#   1. has_required_arguments  →  both image_base64 and prompt are non-empty
#   2. is_valid_base64         →  image_base64 is canonical base64, with an
#                                 optional "data:image/<subtype>;base64,"
#                                 prefix allowed in front
#
# The base64 check is a decode-then-re-encode round trip.  Only strings that
# survive the trip unchanged pass, so missing padding or stray bits in the
# final character are rejected even though lenient decoders accept them.
# =============================================================================

import base64
import binascii
import re
from typing import Any, Mapping


REQUIRED_ARGUMENTS = ("image_base64", "prompt")

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")


def has_required_arguments(arguments: Mapping[str, Any]) -> bool:
    """True when every required argument is present and non-empty."""
    return all(arguments.get(name) for name in REQUIRED_ARGUMENTS)


def strip_data_url_prefix(value: str) -> str:
    return _DATA_URL_PREFIX.sub("", value, count=1)


def is_valid_base64(value: Any) -> bool:
    """Check that `value` is canonical base64, ignoring a data-URL prefix.

    Examples:
        >>> is_valid_base64("aGVsbG8=")
        True
        >>> is_valid_base64("data:image/png;base64,aGVsbG8=")
        True
        >>> is_valid_base64("aGVsbG8")        # missing padding
        False
        >>> is_valid_base64("not-base64!!")
        False
    """
    if not value or not isinstance(value, str):
        return False

    encoded = strip_data_url_prefix(value)
    try:
        decoded = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        # ValueError covers non-ASCII input, which b64decode refuses outright
        return False
    return base64.b64encode(decoded).decode("ascii") == encoded
