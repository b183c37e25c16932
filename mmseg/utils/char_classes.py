"""Character classification for the scan."""

import unicodedata

# (first, last) code points, inclusive
CJK_RANGES = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # Extension A
    (0xF900, 0xFAFF),  # Compatibility Ideographs
    (0x20000, 0x2FA1F),  # Extensions B onwards and Compatibility Supplement
)

CJK = "cjk"
DIGIT = "digit"
LETTER = "letter"
WHITESPACE = "whitespace"
PUNCTUATION = "punctuation"

# Classes whose consecutive characters are emitted as one token
RUN_CLASSES = frozenset({DIGIT, LETTER, WHITESPACE})


def is_cjk(char: str) -> bool:
    """Check whether a character belongs to the segmentable CJK class."""
    code = ord(char)
    for first, last in CJK_RANGES:
        if first <= code <= last:
            return True
    return False


def classify(char: str) -> str:
    """Return the scan class of a single character."""
    if is_cjk(char):
        return CJK
    if char.isspace():
        return WHITESPACE
    category = unicodedata.category(char)
    if category == "Nd":
        return DIGIT
    if char.isalpha() or category.startswith("M"):
        return LETTER
    return PUNCTUATION


def find_run_end(chars: str, start: int) -> int:
    """Return the end of the class run beginning at ``start``.

    CJK, digit, letter and whitespace characters run together with their own
    class. Any other character forms a run of one.
    """
    kind = classify(chars[start])
    end = start + 1
    if kind != CJK and kind not in RUN_CLASSES:
        return end
    while end < len(chars) and classify(chars[end]) == kind:
        end += 1
    return end
