"""Acquisition of per-area line CSVs from the grid-operator API.

Each area is fetched once per run. Failures are isolated per area: the area is
logged and skipped, and the remaining areas still contribute to the snapshot.
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, Iterator, Optional, Sequence

import pandas as pd
import requests

from . import canon
from .exceptions import AcquisitionError
from .types import RawRecord

LOGGER = logging.getLogger(__name__)

Fetcher = Callable[[object, str], Sequence[RawRecord]]


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Cache-Control": "no-cache"})
    return session


def parse_csv(text: str) -> list[dict[str, str]]:
    """
    Parse a headed CSV body into row dicts, all values as strings.

    Column order is kept; blank lines are skipped and empty cells stay "".
    Rows with more fields than the header are cut to the header width and
    short rows are padded with "", so one ragged row does not lose the area.
    """
    text = text.lstrip("\ufeff")
    if not text.strip():
        return []
    try:
        header = pd.read_csv(io.StringIO(text), nrows=0, dtype=str).columns
        width = len(header)
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as exc:
        raise AcquisitionError(f"Unparseable CSV: {exc}") from exc
    return df.fillna("").to_dict(orient="records")


def fetch_area_records(
    area: object,
    date: str,
    *,
    base_url: str = canon.BASE_URL,
    session: Optional[requests.Session] = None,
    timeout: float = canon.DEFAULT_TIMEOUT_S,
) -> list[dict[str, str]]:
    """
    GET one area's CSV for `date` (YYYYMMDD) and return its rows.

    Without a session a short-lived one is opened and closed for this call.
    """
    if session is None:
        with create_session() as own:
            return fetch_area_records(
                area, date, base_url=base_url, session=own, timeout=timeout
            )
    try:
        resp = session.get(
            base_url,
            params={"area": area, "date": date},
            headers={"Cache-Control": "no-cache"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise AcquisitionError(f"{exc} area={area}") from exc
    if not resp.ok:
        raise AcquisitionError(f"HTTP {resp.status_code} area={area}")
    return parse_csv(resp.text)


def default_fetcher(
    *,
    base_url: str = canon.BASE_URL,
    session: Optional[requests.Session] = None,
    timeout: float = canon.DEFAULT_TIMEOUT_S,
) -> Fetcher:
    """
    Bind the endpoint and timeout. The caller owns `session` and closes it;
    with no session each fetch opens and closes its own.
    """
    return partial(
        fetch_area_records,
        base_url=base_url,
        session=session,
        timeout=timeout,
    )


def _safe_fetch(fetch: Fetcher, area: object, date: str) -> Sequence[RawRecord]:
    try:
        return fetch(area, date)
    except Exception as exc:
        # one bad area must not sink the run
        LOGGER.warning("area %s skipped: %s", area, exc)
        return []


def collect_batches(
    areas: Iterable[object],
    date: str,
    fetch: Optional[Fetcher] = None,
    *,
    max_workers: int = 1,
) -> Iterator[tuple[object, Sequence[RawRecord]]]:
    """
    Yield (area, records) for every area that returned rows, in `areas` order.

    With max_workers > 1 the downloads run in a thread pool, but batches are
    still yielded in area order so the reducer sees a fixed sequence.
    """
    fetch = fetch or default_fetcher()
    areas = list(areas)

    if max_workers <= 1:
        results = ((a, _safe_fetch(fetch, a, date)) for a in areas)
        for area, rows in results:
            if rows:
                yield area, rows
        return

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [(a, pool.submit(_safe_fetch, fetch, a, date)) for a in areas]
        for area, fut in futures:
            rows = fut.result()
            if rows:
                yield area, rows
