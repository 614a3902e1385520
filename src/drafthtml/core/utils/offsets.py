"""Conversion of UTF-16 code unit offsets to Python string indices"""


def utf16_index_map(text: str) -> dict[int, int]:
    """Map every UTF-16 code unit offset that starts a character (plus the end) to a code point index.

    Offsets that fall inside a surrogate pair are absent from the map.
    """
    mapping: dict[int, int] = {}
    units = 0
    for index, char in enumerate(text):
        mapping[units] = index
        units += 2 if ord(char) > 0xFFFF else 1
    mapping[units] = len(text)
    return mapping


def utf16_span(index_map: dict[int, int], offset: int, length: int) -> tuple[int, int] | None:
    """Translate a UTF-16 (offset, length) pair to a code point (offset, length) pair.

    Returns None when either end does not land on a character boundary.
    """
    start = index_map.get(offset)
    end = index_map.get(offset + length)
    if start is None or end is None:
        return None
    return start, end - start
