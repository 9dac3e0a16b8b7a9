"""Display helpers for provider free text."""
import re

# A word starts at the beginning of the text or after whitespace, "/" or "-"
_WORD_START = re.compile(r"(^|[\s/-])(\S)")


def title_case(text: str) -> str:
    """
    Capitalize the first letter of each word.

    Unlike ``str.title()`` the rest of each word is left untouched, so
    "clear sky" becomes "Clear Sky" while "UV high" becomes "UV High".
    Slashes and hyphens separate words too: "sand/dust whirls" becomes
    "Sand/Dust Whirls". Whitespace is preserved as-is.
    """
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), text)
