"""
Runtime settings for the Directory / FAQ search service.

Every value has a compiled-in default and can be overridden from the environment.
"""

import os
from typing import Optional

from directory_app.utils.records import DIRECTORY_FLOOR_FIELD

# Published spreadsheet exports (Google Sheets "publish to web" as CSV)
DIRECTORY_CSV_URL = os.environ.get(
    "DIRECTORY_CSV_URL",
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vS2iABeNRjSNn_F__Dcd4SAJWYwno0ajUk9tyRf9WmY240V28Q3jZMxW6NBpZWNtc0visIoj128Kc__/pub?gid=0&single=true&output=csv",
)
FAQ_CSV_URL = os.environ.get(
    "FAQ_CSV_URL",
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vT_rXkbRD1rRq3Fb08uX5fboYgmbqWWKKNB9poXgu1Bv1wHklLmz67_PcEvcTpkBPKfyjq3VIYy32Rl/pub?output=csv",
)

# Subject suggestion form shown when a directory search finds nothing
SUGGESTION_FORM_URL = os.environ.get(
    "SUGGESTION_FORM_URL",
    "https://docs.google.com/forms/d/e/1FAIpQLSfbHuDXDbKlq85_eDGzYY6xtzqNEXCi7pUlR2I5C0t2EawzIA/viewform?embedded=true",
)

# Fuzzy matching tolerance (0 = exact, 1 = anything)
SEARCH_THRESHOLD = float(os.environ.get("SEARCH_THRESHOLD", "0.4"))

FLOOR_FIELD = os.environ.get("FLOOR_FIELD", DIRECTORY_FLOOR_FIELD)

# "positive-int" keeps only floors like 1, 2, 3; "truthy" keeps any non-empty value
FLOOR_OPTION_POLICY = os.environ.get("FLOOR_OPTION_POLICY", "positive-int")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


# Seconds; unset means wait for the remote as long as it takes
FETCH_TIMEOUT = _optional_float(os.environ.get("FETCH_TIMEOUT"))
