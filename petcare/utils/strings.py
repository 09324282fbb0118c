from typing import Optional

def title_case(value: Optional[str]) -> str:
    """Lowercase the string, then capitalize the first letter of each word.

    Words are split on single spaces, so runs of spaces are preserved.
    """
    if not value:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in value.lower().split(" "))

def lower_trim(value: Optional[str]) -> str:
    if not value:
        return ""
    return value.lower().strip()
