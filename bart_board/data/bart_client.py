"""BART legacy JSON API client."""

from __future__ import annotations

import logging
from typing import Any

import requests

from bart_board.data.models import Departure, DepartureBoard, Station

BART_API_BASE = "https://api.bart.gov/api"

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when station or departure data cannot be fetched."""


class TransportError(FetchError):
    """The request failed or returned a non-200 response."""


class DecodeError(FetchError):
    """The response body was not the JSON document we expect."""


def _as_list(value: Any) -> list[Any]:
    # The API collapses one-element arrays into a bare object.
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class BartClient:
    """Thin wrapper around the BART API using requests."""

    def __init__(
        self,
        api_key: str,
        base_url: str = BART_API_BASE,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_stations(self) -> list[Station]:
        """Fetch every station in the system, in API order."""
        response_json = self._get("/stn.aspx", params={"cmd": "stns"})
        try:
            raw_stations = _as_list(response_json["root"]["stations"]["station"])
            stations = [
                Station(name=item["name"], code=item["abbr"], city=item.get("city", ""))
                for item in raw_stations
            ]
        except (KeyError, TypeError, AttributeError) as exc:
            raise DecodeError(f"Unexpected station list shape: missing {exc}") from exc
        logger.debug("Fetched %d stations", len(stations))
        return stations

    def get_departures(self, station_code: str) -> DepartureBoard:
        """Fetch estimated departures for one station, grouped by destination."""
        response_json = self._get("/etd.aspx", params={"cmd": "etd", "orig": station_code})
        board: DepartureBoard = {}
        try:
            for station in _as_list(response_json["root"].get("station")):
                for etd in _as_list(station.get("etd")):
                    destination = etd["destination"]
                    for estimate in _as_list(etd.get("estimate")):
                        board.setdefault(destination, []).append(
                            Departure(
                                destination=destination,
                                minutes=str(estimate["minutes"]),
                                platform=str(estimate.get("platform", "")),
                            )
                        )
        except (KeyError, TypeError, AttributeError) as exc:
            raise DecodeError(f"Unexpected departure shape: missing {exc}") from exc
        logger.debug("Fetched %d destinations for %s", len(board), station_code)
        return board

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        params = {**params, "key": self._api_key, "json": "y"}
        try:
            response = requests.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            logger.warning("BART API request to %s failed: %s", path, exc)
            raise TransportError(f"BART API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text[:200]}"
            logger.warning("BART API request to %s failed: %s", path, detail)
            raise TransportError(f"BART API request failed: {detail}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError("BART API response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise DecodeError("BART API response was not a JSON object")
        return payload


__all__ = ["BART_API_BASE", "BartClient", "DecodeError", "FetchError", "TransportError"]
