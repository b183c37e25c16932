"""Input validation and decoding."""

import re
from typing import Union

from ..errors import DecodingError

# Lone surrogates are not Unicode scalar values
SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")


def decode_text(text: Union[str, bytes, bytearray], encoding: str = "utf-8") -> str:
    """Validate input and return it as a string of Unicode scalar values.

    Args:
        text: Input text, either already decoded or raw bytes
        encoding: Encoding used for bytes input

    Returns:
        Decoded text

    Raises:
        DecodingError: If bytes cannot be decoded or the string holds
            lone surrogates
        TypeError: If the input is neither str nor bytes
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode(encoding)
        except UnicodeDecodeError as e:
            raise DecodingError(
                f"Input is not valid {encoding} at byte {e.start}: {e.reason}"
            ) from e
        except LookupError as e:
            raise DecodingError(f"Unknown encoding: {encoding}") from e
    elif not isinstance(text, str):
        raise TypeError(f"Expected str or bytes, got {type(text).__name__}")

    match = SURROGATE_PATTERN.search(text)
    if match:
        raise DecodingError(
            f"Input contains a lone surrogate at offset {match.start()}"
        )
    return text
