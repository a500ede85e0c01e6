"""Station and departure records returned by the BART API."""

from __future__ import annotations

from dataclasses import dataclass

LEAVING = "Leaving"


@dataclass(frozen=True)
class Station:
    """A BART stop; ``code`` is the API abbreviation, e.g. ``POWL``."""

    name: str
    code: str
    city: str = ""

    def matches(self, code: str) -> bool:
        return self.code.casefold() == code.strip().casefold()


@dataclass(frozen=True)
class Departure:
    """One estimate: ``minutes`` is a digit string or ``"Leaving"``."""

    destination: str
    minutes: str
    platform: str


DepartureBoard = dict[str, list[Departure]]


__all__ = ["LEAVING", "Departure", "DepartureBoard", "Station"]
