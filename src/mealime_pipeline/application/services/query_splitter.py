import re

_SEPARATORS = re.compile(r",|\band\b|&")


def split_items(query: str) -> list[str]:
    """Splits a spoken grocery request into item texts.

    Separators are commas, the word "and" and ampersands. Order is kept and
    empty segments are not dropped: "milk," gives ["milk", ""].
    """
    return [part.strip() for part in _SEPARATORS.split(query)]
