"""
Session state for the Directory and FAQ datasets.

A DirectorySession owns one DatasetSlot per data source. Each slot keeps the current
(records, index) snapshot, the load status and a generation counter. Loads run as
asyncio tasks:

- the directory is loaded when the app starts;
- the FAQ is loaded the first time it is asked for, and only once;
- a load that finishes after a newer one was started is discarded.

A failed load keeps whatever data the slot already had and marks it failed.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List, Optional

from directory_app.config import (
    DIRECTORY_CSV_URL,
    FAQ_CSV_URL,
    FETCH_TIMEOUT,
    FLOOR_FIELD,
    FLOOR_OPTION_POLICY,
    SEARCH_THRESHOLD,
)
from directory_app.services.floor_filter import floor_options
from directory_app.services.query_engine import SearchResult, search
from directory_app.utils.csv_parser import parse_csv
from directory_app.utils.fetcher import fetch_csv
from directory_app.utils.records import FAQ_FIELD_WEIGHTS, Dataset
from directory_app.utils.search_index import SearchIndex, build_index

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]

DIRECTORY_ERROR = "Error loading directory data. Please refresh the page."
FAQ_ERROR = "Error loading FAQ data. Please refresh the page."


class LoadStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class DatasetUnavailableError(RuntimeError):
    """Raised when a dataset is queried after its load failed."""


@dataclass(frozen=True)
class Snapshot:
    records: Dataset = field(default_factory=list)
    index: Optional[SearchIndex] = None


class DatasetSlot:
    def __init__(
        self,
        name: str,
        url: str,
        fetcher: Fetcher,
        error_message: str,
        weights: Optional[Dict[str, float]] = None,
        threshold: float = SEARCH_THRESHOLD,
    ):
        self.name = name
        self.url = url
        self.fetcher = fetcher
        self.error_message = error_message
        self.weights = weights
        self.threshold = threshold

        self.snapshot = Snapshot(records=[], index=self._build([]))
        self.status = LoadStatus.IDLE
        self.error: Optional[str] = None
        self.generation = 0
        self.initialized = False
        self._task: Optional[asyncio.Task] = None

    def _build(self, records: Dataset) -> SearchIndex:
        return build_index(records, self.weights, threshold=self.threshold, ignore_location=True)

    @property
    def records(self) -> Dataset:
        return self.snapshot.records

    async def _load(self, generation: int) -> LoadStatus:
        try:
            text = await self.fetcher(self.url)
            records = parse_csv(text)
            index = self._build(records)
        except Exception:
            logger.exception("%s init error", self.name.capitalize())
            if generation == self.generation:
                self.status = LoadStatus.FAILED
                self.error = self.error_message
            return self.status

        if generation != self.generation:
            logger.info("Discarding stale %s load (generation %d, current %d)",
                        self.name, generation, self.generation)
            return self.status

        self.snapshot = Snapshot(records=records, index=index)
        self.status = LoadStatus.READY
        self.error = None
        if not records:
            logger.warning("%s source returned no rows: %s", self.name, self.url)
        logger.info("Loaded %d %s records", len(records), self.name)
        return self.status

    def start(self) -> asyncio.Task:
        """Start a new load; any load still in flight is superseded."""
        self.initialized = True
        self.generation += 1
        self.status = LoadStatus.PENDING
        logger.info("Loading %s data from %s", self.name, self.url)
        self._task = asyncio.ensure_future(self._load(self.generation))
        return self._task

    async def ensure_loaded(self) -> LoadStatus:
        """Start the first load if needed and wait for the in-flight one."""
        if not self.initialized:
            self.start()
        return await self._wait()

    async def reload(self) -> LoadStatus:
        """Start a fresh load and wait until the newest load has finished."""
        self.start()
        return await self._wait()

    async def _wait(self) -> LoadStatus:
        # a reload may replace the task while we wait
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)
        return self.status

    def raise_if_failed(self) -> None:
        if self.status == LoadStatus.FAILED:
            raise DatasetUnavailableError(self.error or self.error_message)

    def query(self, query: str, category_filter: Optional[str] = None,
              category_field: str = FLOOR_FIELD, is_final: bool = False) -> SearchResult:
        snapshot = self.snapshot
        return search(snapshot.index, snapshot.records, query,
                      category_filter=category_filter,
                      category_field=category_field,
                      is_final=is_final)

    def describe(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "records": len(self.records),
            "error": self.error,
        }


class DirectorySession:
    """Directory + FAQ state for one running app."""

    def __init__(
        self,
        directory_url: str = DIRECTORY_CSV_URL,
        faq_url: str = FAQ_CSV_URL,
        fetcher: Optional[Fetcher] = None,
        floor_field: str = FLOOR_FIELD,
        floor_policy: str = FLOOR_OPTION_POLICY,
        threshold: float = SEARCH_THRESHOLD,
    ):
        fetcher = fetcher or partial(fetch_csv, timeout=FETCH_TIMEOUT)
        self.floor_field = floor_field
        self.floor_policy = floor_policy

        self.directory = DatasetSlot("directory", directory_url, fetcher, DIRECTORY_ERROR,
                                     threshold=threshold)
        self.faq = DatasetSlot("faq", faq_url, fetcher, FAQ_ERROR,
                               weights=FAQ_FIELD_WEIGHTS, threshold=threshold)

    # ---- Directory ----
    async def ensure_directory(self) -> None:
        await self.directory.ensure_loaded()
        self.directory.raise_if_failed()

    def search_directory(self, query: str = "", floor: Optional[str] = None,
                         is_final: bool = False) -> SearchResult:
        return self.directory.query(query, category_filter=floor,
                                    category_field=self.floor_field, is_final=is_final)

    def reset_directory(self) -> SearchResult:
        return self.search_directory("")

    def floor_options(self) -> List[Dict[str, Any]]:
        return floor_options(self.directory.records, field=self.floor_field, policy=self.floor_policy)

    # ---- FAQ ----
    async def ensure_faq(self) -> None:
        await self.faq.ensure_loaded()
        self.faq.raise_if_failed()

    def search_faq(self, query: str = "", is_final: bool = False) -> SearchResult:
        return self.faq.query(query, is_final=is_final)

    def reset_faq(self) -> SearchResult:
        return self.search_faq("")

    def status(self) -> Dict[str, Any]:
        return {
            "directory": self.directory.describe(),
            "faq": self.faq.describe(),
        }
