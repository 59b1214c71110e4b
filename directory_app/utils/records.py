"""
Record model shared by the Directory and FAQ pipelines.

A Record is a plain dict whose keys are the CSV header names, so its shape is only
known once a dataset is loaded:

- Directory rows: free-form columns, one of which is ``FLOOR``.
- FAQ rows: ``Question``, ``Answer``, ``Category``, ``Keywords``.
"""

from typing import Dict, List

Record = Dict[str, str]
Dataset = List[Record]

# Directory
DIRECTORY_FLOOR_FIELD = "FLOOR"
HIDDEN_TABLE_COLUMNS = {"KEYWORDS"}

# FAQ
FAQ_QUESTION = "Question"
FAQ_ANSWER = "Answer"
FAQ_CATEGORY = "Category"
FAQ_KEYWORDS = "Keywords"

FAQ_FIELD_WEIGHTS: Dict[str, float] = {
    FAQ_QUESTION: 0.6,
    FAQ_ANSWER: 0.3,
    FAQ_KEYWORDS: 0.5,
}


def header_fields(dataset: Dataset) -> List[str]:
    """Field names of a dataset, taken from its first record."""
    if not dataset:
        return []
    return list(dataset[0].keys())
