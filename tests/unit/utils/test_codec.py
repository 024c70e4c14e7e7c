"""Unit tests for the base62 short code codec in codec.py.

Test coverage includes:

1. Known values
   - Ensures encode()/decode() agree with hand-computed base62 numerals.

2. Round trip
   - Ensures decode(encode(n)) == n across the 63-bit key range.

3. Alphabet
   - Ensures short codes only contain [0-9a-zA-Z] and carry no leading zeros.

4. Error handling
   - Ensures encode() rejects negatives and non-integers.
   - Ensures decode() rejects empty input and out-of-alphabet characters.
"""

import random

import pytest

from urlmapper.utils.codec import ALPHABET, BASE, encode, decode
from urlmapper.exceptions import InvalidShortCodeError


# -------------------------------
# 1. Known values
# -------------------------------


@pytest.mark.parametrize(
    'number, shortcode',
    [
        (0, '0'),
        (1, '1'),
        (10, 'a'),
        (35, 'z'),
        (36, 'A'),
        (61, 'Z'),
        (62, '10'),
        (125, '21'),
        (3843, 'ZZ'),
        (238327, 'ZZZ'),
        (2**63 - 1, 'aZl8N0y58M7'),
    ],
)
def test_known_values(number, shortcode):
    assert encode(number) == shortcode
    assert decode(shortcode) == number


def test_alphabet_order():
    assert BASE == 62
    assert ALPHABET.startswith('0123456789abcdefghijklmnopqrstuvwxyz')
    assert ALPHABET.endswith('ABCDEFGHIJKLMNOPQRSTUVWXYZ')


def test_decode_accepts_leading_zeros():
    """Leading zeros don't change the value of a numeral."""
    assert decode('01') == 1


# -------------------------------
# 2. Round trip
# -------------------------------


def test_round_trip_over_key_range():
    rng = random.Random(62)
    numbers = [0, 1, BASE - 1, BASE, 2**63 - 1] + [rng.randrange(2**63) for _ in range(500)]

    for number in numbers:
        assert decode(encode(number)) == number


# -------------------------------
# 3. Alphabet
# -------------------------------


def test_shortcodes_use_alphabet_without_leading_zeros():
    for number in range(1, 5000, 7):
        shortcode = encode(number)
        assert set(shortcode) <= set(ALPHABET)
        assert not shortcode.startswith('0')


# -------------------------------
# 4. Error handling
# -------------------------------


@pytest.mark.parametrize('number', [-1, -62])
def test_encode_rejects_negative_numbers(number):
    with pytest.raises(ValueError):
        encode(number)


@pytest.mark.parametrize('number', [1.0, '1', None, True])
def test_encode_rejects_non_integers(number):
    with pytest.raises(TypeError):
        encode(number)


@pytest.mark.parametrize('shortcode', ['', 'ab-c', 'a b', 'ä', '12/', None])
def test_decode_rejects_invalid_shortcodes(shortcode):
    with pytest.raises(InvalidShortCodeError):
        decode(shortcode)


def test_decode_error_names_the_offending_character():
    with pytest.raises(InvalidShortCodeError, match="Invalid character '-' in short code 'ab-c'."):
        decode('ab-c')
