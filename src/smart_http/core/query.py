# src/smart_http/core/query.py
"""
Query string encode/decode.

Includes:
- add_query_string / add_query_param - append encoded pairs to a URI,
  keeping any ``#fragment`` at the end
- parse_query / parse_nullable_query - parse a raw query string into a
  case-insensitive multi-value mapping
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote

from requests.structures import CaseInsensitiveDict

from .exceptions import ConfigurationError

QueryPairs = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

# Bytes that were not valid UTF-8, left by surrogateescape
_UNDECODED_BYTE = re.compile("[\udc80-\udcff]")


def _encode(component: str) -> str:
    # Reserved characters ("&", "=", "/", "?", ...) are always escaped
    return quote(component, safe="")


def _unescape(component: str) -> str:
    """
    ``+`` as space, then percent-decoding as UTF-8.

    Escapes that do not form valid UTF-8 stay as written (``%FF`` stays ``%FF``).
    """
    text = unquote(component.replace("+", " "), errors="surrogateescape")
    return _UNDECODED_BYTE.sub(lambda m: "%{:02X}".format(ord(m.group(0)) - 0xDC00), text)


def add_query_param(uri: str, name: str, value: str) -> str:
    """
    Добавить один параметр к URI.

    Example:
        >>> add_query_param("https://api.example.com/items", "q", "a b")
        'https://api.example.com/items?q=a%20b'
    """
    if uri is None or name is None or value is None:
        raise ConfigurationError("uri, name and value are required")

    return add_query_string(uri, [(name, value)])


def add_query_string(uri: str, query: QueryPairs) -> str:
    """
    Append query parameters to a URI.

    Pairs are appended in input order. If the URI already has a query the
    first new pair is joined with ``&``, otherwise with ``?``. A fragment is
    moved after the appended parameters.

    Args:
        uri: Base URI (absolute or relative, may already contain ``?`` and ``#``)
        query: Mapping or iterable of ``(key, value)`` pairs

    Returns:
        URI with encoded parameters

    Examples:
        >>> add_query_string("/search#top", {"q": "x&y"})
        '/search?q=x%26y#top'

        >>> add_query_string("/search?page=1", [("tag", "a"), ("tag", "b")])
        '/search?page=1&tag=a&tag=b'
    """
    if uri is None:
        raise ConfigurationError("uri is required")
    if query is None:
        raise ConfigurationError("query is required")

    pairs = query.items() if isinstance(query, Mapping) else query

    anchor_index = uri.find("#")
    base = uri
    fragment = ""
    if anchor_index != -1:
        base = uri[:anchor_index]
        fragment = uri[anchor_index:]

    has_query = "?" in base

    parts = [base]
    for key, value in pairs:
        parts.append("&" if has_query else "?")
        parts.append(_encode(key))
        parts.append("=")
        parts.append(_encode(value))
        has_query = True

    parts.append(fragment)
    return "".join(parts)


class KeyValueAccumulator:
    """
    Collects repeated query keys during a single parse.

    Keys are compared case-insensitively; the spelling seen first wins.
    Values for a key keep their insertion order.

    Example:
        >>> acc = KeyValueAccumulator()
        >>> acc.append("a", "1")
        >>> acc.append("A", "2")
        >>> acc.get_results()["a"]
        ['1', '2']
    """

    def __init__(self):
        # lower(key) -> (original key, values)
        self._accumulator: Dict[str, Tuple[str, List[str]]] = {}
        self.value_count = 0

    @property
    def has_values(self) -> bool:
        return self.value_count > 0

    @property
    def key_count(self) -> int:
        return len(self._accumulator)

    def append(self, key: str, value: str) -> None:
        """Добавить значение для ключа (ключ может повторяться)."""
        folded = key.lower()
        entry = self._accumulator.get(folded)
        if entry is None:
            self._accumulator[folded] = (key, [value])
        else:
            entry[1].append(value)

        self.value_count += 1

    def get_results(self) -> CaseInsensitiveDict:
        """Вернуть накопленные пары как case-insensitive mapping ключ -> список значений."""
        results = CaseInsensitiveDict()
        for key, values in self._accumulator.values():
            results[key] = list(values)
        return results


def parse_query(query_string: Optional[str]) -> CaseInsensitiveDict:
    """
    Parse a query string into its keys and values.

    Args:
        query_string: Raw query string, with or without the leading ``?``

    Returns:
        Mapping key -> list of values (empty if nothing was parsed)
    """
    result = parse_nullable_query(query_string)
    if result is None:
        return CaseInsensitiveDict()
    return result


def parse_nullable_query(query_string: Optional[str]) -> Optional[CaseInsensitiveDict]:
    """
    Parse a query string into its keys and values.

    ``+`` is read as a space before percent-decoding. A segment without its
    own ``=`` is stored as a key with an empty value.

    Args:
        query_string: Raw query string, with or without the leading ``?``

    Returns:
        Mapping key -> list of values, or None if there are no entries

    Examples:
        >>> dict(parse_nullable_query("?a=1&a=2&b=3"))
        {'a': ['1', '2'], 'b': ['3']}

        >>> parse_nullable_query("?") is None
        True
    """
    if not query_string or query_string == "?":
        return None

    accumulator = KeyValueAccumulator()

    scan_index = 1 if query_string[0] == "?" else 0
    text_length = len(query_string)

    # Position of the next "=" is tracked across segments, not per segment
    equal_index = query_string.find("=")
    if equal_index == -1:
        equal_index = text_length

    while scan_index < text_length:
        delimiter_index = query_string.find("&", scan_index)
        if delimiter_index == -1:
            delimiter_index = text_length

        if equal_index < delimiter_index:
            while scan_index != equal_index and query_string[scan_index].isspace():
                scan_index += 1

            name = query_string[scan_index:equal_index]
            value = query_string[equal_index + 1:delimiter_index]
            accumulator.append(
                _unescape(name),
                _unescape(value)
            )

            equal_index = query_string.find("=", delimiter_index)
            if equal_index == -1:
                equal_index = text_length

        elif delimiter_index > scan_index:
            accumulator.append(query_string[scan_index:delimiter_index], "")

        scan_index = delimiter_index + 1

    if not accumulator.has_values:
        return None

    return accumulator.get_results()
