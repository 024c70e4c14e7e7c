"""Base62 short code codec

This module converts record keys to short codes and back. The mapping is a
plain positional base62 numeral system, so it is lossless and deterministic:
the same key always yields the same short code and vice versa.

Functions:
    encode(number: int) -> str:
        Encode a non-negative integer into a base62 short code.

    decode(shortcode: str) -> int:
        Decode a base62 short code back into an integer.

Example:
    >>> from urlmapper.utils.codec import encode, decode
    >>> encode(125)
    '21'
    >>> decode('21')
    125
    >>> decode('ab-c')
    Traceback (most recent call last):
        ...
    urlmapper.exceptions.InvalidShortCodeError: Invalid character '-' in short code 'ab-c'.

NOTE:
    The alphabet order (digits, lowercase, uppercase) is shared with every other
    client of the short code space. Changing it changes every short code.
"""

import string

from urlmapper.exceptions import InvalidShortCodeError


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)  # 62
_INDEX = {char: index for index, char in enumerate(ALPHABET)}


def encode(number: int) -> str:
    """Encode a non-negative integer into a base62 short code.

    Args:
        number (int):
            Record key to encode.

    Returns:
        str: Most-significant-digit-first base62 representation without
             leading zeros ('0' for the value 0).

    Raises:
        TypeError: If number is not an integer.
        ValueError: If number is negative.

    Example:
        >>> encode(0)
        '0'
        >>> encode(61)
        'Z'
        >>> encode(62)
        '10'
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError(f'Number must be of type integer (given type: {type(number)}).')
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    if number == 0:
        return ALPHABET[0]

    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(reversed(digits))


def decode(shortcode: str) -> int:
    """Decode a base62 short code back into an integer.

    Args:
        shortcode (str):
            Short code to decode.

    Returns:
        int: The decoded record key.

    Raises:
        InvalidShortCodeError:
            If the short code is empty, not a string or contains a character
            outside the base62 alphabet.

    Example:
        >>> decode('10')
        62
    """
    if not isinstance(shortcode, str) or not shortcode:
        raise InvalidShortCodeError(f'Short code must be a non-empty string (given value: {shortcode!r}).')

    number = 0
    for char in shortcode:
        index = _INDEX.get(char)
        if index is None:
            raise InvalidShortCodeError(f"Invalid character '{char}' in short code '{shortcode}'.")
        number = number * BASE + index
    return number
