"""
Inappropriate language detection for user supplied text.
"""

from typing import Any, Mapping, Optional

from better_profanity import profanity

profanity.load_censor_words()


def contains_profanity(text: Any) -> bool:
    """Return True if the text contains a censored word. Non-strings and empty strings are clean."""
    if not text or not isinstance(text, str):
        return False
    return bool(profanity.contains_profanity(text))


def find_profane_field(fields: Mapping[str, Any]) -> Optional[str]:
    """Return the name of the first field whose value is profane, or None."""
    for field_name, value in fields.items():
        if contains_profanity(value):
            return field_name
    return None
