from __future__ import annotations
from datetime import timedelta, timezone
from typing import Final

# Grid-operator areas (1 = Hokkaido .. 10 = Okinawa)
AREAS: Final[tuple[int, ...]] = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
BASE_URL: Final[str] = "https://powerflowmap.shikiblog.link/api/chinaiKikanJisseki.php"
MAPPING_PATH: Final[str] = "mappings/line_map.json"
OUT_DIR: Final[str] = "public/data"
DEFAULT_TIMEOUT_S: Final[float] = 30.0

JST: Final = timezone(timedelta(hours=9), "JST")
LATEST_KEY: Final[str] = "latest"
KEY_SEPARATOR: Final[str] = "::"

UTIL_MAX: Final[float] = 1.2
UTIL_DECIMALS: Final[int] = 3
SCALE_QUANTILE: Final[float] = 0.95

# Output fields, in wire order
LINE_FIELDS: Final[list[str]] = ["lineId", "p_mw", "capacity_mw", "util", "dir"]

# Semantic field -> candidate substrings, checked in this order.
# A key matches when its lowercased form contains any candidate; the first
# matching key in the record's own order wins. Fields resolve independently.
FIELD_CANDIDATES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("area", ("対象エリア", "area")),
    ("line_id", ("送電線名", "設備", "line", "name", "id")),
    ("power", ("潮流", "p(mw)", "p_mw", "mw", "power")),
    ("capacity", ("運用容量", "容量", "capacity")),
    ("time", ("時刻", "time", "timestamp", "時分")),
)
