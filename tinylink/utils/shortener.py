"""Short code generation utility

Functions:
    generate_shortcode(length=4, alphabet=SHORTCODE_ALPHABET):
        Generate a random short code suitable for use as a URL slug.

Example:
    >>> from tinylink.utils import generate_shortcode
    >>> generate_shortcode(4)
    'Xq3b'
"""

import secrets

from tinylink.constants import SHORTCODE_ALPHABET, Defaults


def generate_shortcode(length: int = Defaults.SHORTCODE_LENGTH, alphabet: str = SHORTCODE_ALPHABET) -> str:
    """Generate a random short code.

    Each character is an independent, uniform draw from `alphabet`, taken from
    the OS CSPRNG so codes can't be predicted from earlier ones.

    Args:
        length (int, optional):
            Number of characters. Defaults to 4.

        alphabet (str, optional):
            Characters to draw from. Defaults to the 62-character [A-Za-z0-9] alphabet.

    Returns:
        str: A random string of exactly `length` characters from `alphabet`.

    Raises:
        TypeError: If length isn't an integer.
        ValueError: If length isn't positive or the alphabet is empty.

    NOTE:
        With the default length the code space is 62^4 (about 14.8M codes),
        so collisions become likely as the table fills. Callers must insert
        conditionally and regenerate on conflict.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
