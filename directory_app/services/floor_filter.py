"""
Floor options for the directory's floor dropdown.

Two policies exist:
- "positive-int" (default): only values that are whole numbers above zero.
- "truthy": any non-empty value; numeric ones first in numeric order.
"""

import logging
from typing import Any, Dict, List

import pandas as pd

from directory_app.utils.records import DIRECTORY_FLOOR_FIELD, Dataset

logger = logging.getLogger(__name__)

POLICY_POSITIVE_INT = "positive-int"
POLICY_TRUTHY = "truthy"
POLICIES = (POLICY_POSITIVE_INT, POLICY_TRUTHY)


def floor_values(records: Dataset, field: str = DIRECTORY_FLOOR_FIELD,
                 policy: str = POLICY_POSITIVE_INT) -> List[str]:
    """Distinct, sorted floor values present in ``records``."""
    if policy not in POLICIES:
        raise ValueError(f"Unknown floor option policy '{policy}'. Expected one of {POLICIES}")

    if not records:
        return []

    values = pd.Series([r.get(field, "") for r in records], dtype="object")
    values = values[values.astype(bool)].drop_duplicates()
    if values.empty:
        return []

    numeric = pd.to_numeric(values, errors="coerce")
    df = pd.DataFrame({"value": values, "numeric": numeric})

    if policy == POLICY_POSITIVE_INT:
        df = df[df["numeric"].notna() & (df["numeric"] > 0) & (df["numeric"] % 1 == 0)]
        df = df.sort_values("numeric", kind="stable")
    else:
        df = df.sort_values(["numeric", "value"], kind="stable", na_position="last")

    dropped = len(values) - len(df)
    if dropped:
        logger.debug("Dropped %d floor value(s) under policy %s", dropped, policy)

    return df["value"].tolist()


def floor_options(records: Dataset, field: str = DIRECTORY_FLOOR_FIELD,
                  policy: str = POLICY_POSITIVE_INT) -> List[Dict[str, Any]]:
    return [{"value": v, "label": f"Floor {v}"} for v in floor_values(records, field, policy)]
