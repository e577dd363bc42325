"""String helpers with C-string semantics carried over to Python ``str``.

Where C hands back a pointer into a string, these functions return an
index, or ``None`` where C would return NULL. Where C fills a
caller-provided buffer, the resulting string is returned instead. The
end of a string compares like a NUL character (code 0).
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple


def _single_char(c: str) -> str:
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c


def _code_at(s: str, index: int) -> int:
    return ord(s[index]) if index < len(s) else 0


def strchr(s: str, c: str) -> Optional[int]:
    """Index of the first ``c`` in ``s``, or ``None``.

    Searching for ``"\\0"`` finds the terminator, at ``len(s)``.
    """
    _single_char(c)
    if c == "\0":
        return len(s)
    index = s.find(c)
    return None if index < 0 else index


def strrchr(s: str, c: str) -> Optional[int]:
    """Index of the last ``c`` in ``s``, or ``None``.

    Searching for ``"\\0"`` finds the terminator, at ``len(s)``.
    """
    _single_char(c)
    if c == "\0":
        return len(s)
    index = s.rfind(c)
    return None if index < 0 else index


def strcmp(s1: str, s2: str) -> int:
    """Difference of the character codes at the first place the strings differ.

    Zero when they are equal; the end of a string counts as code 0.
    """
    for a, b in zip(s1, s2):
        if a != b:
            return ord(a) - ord(b)
    common = min(len(s1), len(s2))
    return _code_at(s1, common) - _code_at(s2, common)


def strncmp(s1: str, s2: str, n: int) -> int:
    """Like :func:`strcmp` over at most the first ``n`` characters."""
    if n <= 0:
        return 0
    return strcmp(s1[:n], s2[:n])


def strjoin(s1: Optional[str], s2: Optional[str]) -> Optional[str]:
    """Concatenate two strings; a missing one yields the other unchanged."""
    if s1 is None:
        return s2
    if s2 is None:
        return s1
    return s1 + s2


def strlcpy(src: str, size: int) -> Tuple[str, int]:
    """Copy ``src`` into a buffer of ``size`` characters.

    Returns the copied text, at most ``size - 1`` characters, and the
    full length of ``src``, so truncation shows as ``len(copy) < total``.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return "", len(src)
    return src[: size - 1], len(src)


def strlcat(dest: str, src: str, size: int) -> Tuple[str, int]:
    """Append ``src`` to ``dest`` within a buffer of ``size`` characters.

    Returns the resulting text and the length the full result would
    have had; when ``dest`` already fills the buffer, nothing is appended
    and the length reported is ``size + len(src)``.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    dest_len = min(len(dest), size)
    room = size - len(dest) - 1
    result = dest + src[:room] if room > 0 else dest
    if size > dest_len:
        return result, dest_len + len(src)
    return result, size + len(src)


def strmapi(s: Optional[str], func: Callable[[int, str], str]) -> Optional[str]:
    """Build a string from ``func(index, char)`` applied to every character."""
    if s is None:
        return None
    return "".join(func(index, char) for index, char in enumerate(s))


def strnstr(haystack: str, needle: str, length: int) -> Optional[int]:
    """Index of ``needle`` within the first ``length`` characters of ``haystack``.

    An empty needle matches at 0; ``None`` when there is no match.
    """
    if needle == "":
        return 0
    limit = min(length, len(haystack))
    if limit <= 0:
        return None
    index = haystack[:limit].find(needle)
    return None if index < 0 else index


def strtrim(s: Optional[str], charset: Optional[str]) -> Optional[str]:
    """Remove characters in ``charset`` from both ends of ``s``."""
    if s is None or charset is None:
        return None
    return s.strip(charset)


def substr(s: Optional[str], start: int, length: int) -> Optional[str]:
    """At most ``length`` characters of ``s`` from ``start``.

    A start at or past the end gives the empty string.
    """
    if s is None:
        return None
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start >= len(s):
        return ""
    return s[start : start + length]


def split(s: Optional[str], sep: str) -> Optional[List[str]]:
    """Split ``s`` on ``sep``, dropping empty pieces."""
    if s is None:
        return None
    _single_char(sep)
    return [piece for piece in s.split(sep) if piece]