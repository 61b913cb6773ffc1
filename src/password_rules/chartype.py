"""
Reduces Unicode general categories to the character groupings used by password
policies.
"""

import unicodedata
from enum import StrEnum
from types import MappingProxyType

__all__ = ("CharacterClass", "classify", "classify_counts")


class CharacterClass(StrEnum):
    CONTROL = "control"
    SPACE = "space"
    DIGIT = "digit"
    UPPER = "upper"
    LOWER = "lower"
    SPECIAL = "special"


_CATEGORY_MAP = MappingProxyType(
    {
        "Nd": CharacterClass.DIGIT,  # 0-9
        "Lu": CharacterClass.UPPER,  # A-Z
        "Ll": CharacterClass.LOWER,  # a-z
        "Ps": CharacterClass.SPECIAL,  # ([{
        "Pe": CharacterClass.SPECIAL,  # )]}
        "Pd": CharacterClass.SPECIAL,  # -
        "Pc": CharacterClass.SPECIAL,  # _
        "Po": CharacterClass.SPECIAL,  # !"#%&'*,./:;?@\
        "Sc": CharacterClass.SPECIAL,  # $
        "Sm": CharacterClass.SPECIAL,  # +<=>|~
        "Sk": CharacterClass.SPECIAL,  # ^`
        "Zs": CharacterClass.SPACE,  # <space>
    }
)


def classify(char: str) -> CharacterClass:
    """
    Returns the character class of a single character.

    Categories not listed above (control characters, titlecase and modifier
    letters, initial/final quotes, other symbols, ...) fall back to
    :attr:`CharacterClass.CONTROL`.
    """
    return _CATEGORY_MAP.get(unicodedata.category(char), CharacterClass.CONTROL)


def classify_counts(text: str) -> dict[CharacterClass, int]:
    """
    Counts the characters of ``text`` per class. Every class is present in the
    result, so the values always sum up to ``len(text)``.
    """
    counts = dict.fromkeys(CharacterClass, 0)
    for char in text:
        counts[classify(char)] += 1
    return counts
