"""Shortcode generation utility

This module provides a helper function for drawing uniformly random short
codes from the Base62 alphabet.

Functions:
    generate_shortcode(length=6, alphabet=ShortCode.ALPHABET):
        Generate a random short code suitable for use as a URL slug.

Example:
    >>> from shortlinks.utils import generate_shortcode
    >>> generate_shortcode()
    'q3ZbT0'
"""

import secrets

from shortlinks.constants import ShortCode


def generate_shortcode(length: int = ShortCode.LENGTH, alphabet: str = ShortCode.ALPHABET) -> str:
    """Generate a random, fixed-length short code.

    Every position is drawn independently and uniformly from `alphabet` using
    the `secrets` CSPRNG, so codes are not enumerable. With the default
    parameters the code space holds 62**6 (about 5.6e10) values; collisions
    against existing codes are unlikely but possible and are resolved by the
    caller (see ShortLinkAllocator).

    Args:
        length (int, optional):
            Number of characters in the code. Defaults to 6.

        alphabet (str, optional):
            Symbols to draw from. Defaults to [A-Za-z0-9].

    Returns:
        str: A random code of exactly `length` characters.

    Raises:
        TypeError: if `length` is not an integer.
        ValueError: if `length` is not positive or `alphabet` is empty.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
