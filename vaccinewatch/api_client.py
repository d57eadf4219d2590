from __future__ import annotations

import httpx

from vaccinewatch.domain import FetchError, Location, parse_locations

DEFAULT_API_BASE_URL = "https://www.vaccinespotter.org/api/v0"


def build_state_url(base_url: str, state: str) -> str:
    # e.g. .../states/CA.json
    return f"{base_url.rstrip('/')}/states/{state.upper()}.json"


def fetch_locations(
    *,
    base_url: str,
    state: str,
    transport: httpx.BaseTransport | None = None,
) -> list[Location]:
    url = build_state_url(base_url, state)

    try:
        with httpx.Client(transport=transport) as client:
            r = client.get(url)
            r.raise_for_status()
            payload = r.json()
    except httpx.HTTPError as e:
        raise FetchError(f"Request to {url} failed ({type(e).__name__}: {e})") from e
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError both land here
        raise FetchError(f"Response from {url} is not valid JSON ({e})") from e

    return parse_locations(payload)
