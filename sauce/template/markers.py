"""
Разделители плейсхолдеров.
"""

from __future__ import annotations

from dataclasses import dataclass

# Символы, зарезервированные грамматикой плейсхолдера
_RESERVED_CHARS = set("|:,\"'\\") | set(" \t\r\n")


@dataclass(frozen=True)
class Markers:
    """
    Пара разделителей плейсхолдера.

    Литеральный открывающий разделитель в тексте записывается удвоением:
    при маркерах по умолчанию "{{{{" даёт в выводе "{{".
    """
    open: str = "{{"
    close: str = "}}"

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValueError("Markers must be non-empty strings")
        if self.open == self.close:
            raise ValueError(f"Open and close markers must differ (got {self.open!r})")
        for marker in (self.open, self.close):
            bad = _RESERVED_CHARS.intersection(marker)
            if bad:
                raise ValueError(f"Marker {marker!r} contains reserved characters: {''.join(sorted(bad))!r}")

    @property
    def escape(self) -> str:
        """Последовательность, обозначающая литеральный открывающий разделитель."""
        return self.open * 2


DEFAULT_MARKERS = Markers()


__all__ = ["Markers", "DEFAULT_MARKERS"]
