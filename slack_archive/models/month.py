"""Month keys used to bucket messages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class MonthKey:
    """A (year, month) pair. Months run 1 to 12."""

    year: int
    month: int

    @classmethod
    def parse(cls, year: str, month: str) -> "MonthKey":
        """Build a key from the digit strings of a YYYY-MM-DD filename."""
        return cls(year=int(year), month=int(month))

    def next(self) -> "MonthKey":
        if self.month >= 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def prev(self) -> "MonthKey":
        if self.month <= 1:
            return MonthKey(self.year - 1, 12)
        return MonthKey(self.year, self.month - 1)

    # Zero-padded strings for building YYYY/MM paths and links

    @property
    def year_str(self) -> str:
        return f"{self.year:4d}"

    @property
    def month_str(self) -> str:
        return f"{self.month:02d}"

    @property
    def next_year(self) -> str:
        return self.next().year_str

    @property
    def next_month(self) -> str:
        return self.next().month_str

    @property
    def prev_year(self) -> str:
        return self.prev().year_str

    @property
    def prev_month(self) -> str:
        return self.prev().month_str

    def __str__(self) -> str:
        return f"{self.year_str}-{self.month_str}"
