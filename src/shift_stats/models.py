"""Data models for the top-workers report."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RankedEntry:
    """One line of the report: a worker name and its completed-shift count."""

    name: str
    shifts: int

    def as_dict(self) -> dict:
        return {"name": self.name, "shifts": self.shifts}
