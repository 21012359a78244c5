"""StringBuilder for O(n) string accumulation.

Holds the markup fragments produced during one render pass. Appends to a
list and joins once at the end: O(n) total vs O(n²) for repeated string
concatenation.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.
"""

from __future__ import annotations


class StringBuilder:
    """Append-only fragment accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("<p>").append("Hello").append("</p>")
            >>> sb.build()
            '<p>Hello</p>'
    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of fragments (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any fragment has been appended."""
        return bool(self._parts)
