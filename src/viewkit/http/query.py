"""Immutable query string parameters."""

import re
from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

_INT_RE = re.compile(r"[+-]?[0-9]+")


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, str):
            query_string = query_string.encode("latin-1")
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing or blank."""
        values = self._data.get(key)
        if values and values[0]:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int) -> int:
        """Return value as int, or *default* if missing, blank, or not numeric.

        Only an optional sign and ASCII digits count as numeric: ``" 7 "``,
        ``"1_000"`` and non-ASCII digits fall back to *default*.
        """
        value = self.get(key)
        if value is None or not _INT_RE.fullmatch(value):
            return default
        return int(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return value as bool (``true``/``1``/``yes``/``on`` → True)."""
        value = self.get(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw
