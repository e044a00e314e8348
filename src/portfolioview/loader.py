"""Loader for JSON content collections."""

import json
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path

import requests
import structlog
from pydantic import ValidationError as PydanticValidationError

from portfolioview.exceptions import ParseError, SchemaError, TransportError
from portfolioview.schemas.content import RECORD_TYPES, ContentCollection

logger = structlog.get_logger(__name__)

# Constants
DEFAULT_TIMEOUT_SECONDS = 10
MAX_BODY_PREVIEW_LENGTH = 200
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def is_remote(base: str) -> bool:
    """True if the base location is an HTTP(S) URL."""
    return base.lower().startswith(("http://", "https://"))


class CollectionLoader:
    """Fetches JSON collections and validates them into typed records."""

    def __init__(
        self,
        base: str | Path,
        session: requests.Session | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize loader.

        Args:
            base: Base URL (http/https) or local directory holding ``<name>.json`` files
            session: Optional requests session (one is created for remote bases)
            timeout_seconds: Request timeout
        """
        self.base = str(base)
        self.remote = is_remote(self.base)
        self.session = session or (requests.Session() if self.remote else None)
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(loader="CollectionLoader", base=self.base)

    def location_of(self, name: str) -> str:
        """Resolve a collection name (or file name) to its URL or path."""
        filename = name if name.endswith(".json") else f"{name}.json"
        if self.remote:
            return f"{self.base.rstrip('/')}/{filename}"
        return str(Path(self.base) / filename)

    def load(self, name: str) -> ContentCollection:
        """
        Load one collection.

        Args:
            name: Collection name, e.g. "projects"

        Returns:
            ContentCollection of validated records

        Raises:
            TransportError: Fetch failed or returned a non-success status
            ParseError: Body is not valid JSON
            SchemaError: Top-level value is not a list
        """
        collection_name = name[:-5] if name.endswith(".json") else name
        location = self.location_of(name)
        self.logger.debug("Loading collection", collection=collection_name, location=location)

        body = self._fetch_remote(location) if self.remote else self._read_local(location)

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            self.logger.error(
                "Invalid JSON in collection",
                location=location,
                error=str(e),
                body_preview=body[:MAX_BODY_PREVIEW_LENGTH],
            )
            raise ParseError(f"Invalid JSON in {location}: {e}", path=location) from e

        if not isinstance(data, list):
            raise SchemaError(
                f"Expected a JSON array in {location}, got {type(data).__name__}",
                path=location,
            )

        records = self._validate_records(collection_name, data)
        self.logger.info("Loaded collection", collection=collection_name, count=len(records))
        return ContentCollection(name=collection_name, source=location, records=records)

    def load_all(self, names: list[str]) -> dict[str, ContentCollection]:
        """
        Load several collections concurrently, all or nothing.

        Every fetch is started at once and all are joined before returning.
        The first failure is raised immediately, without waiting for fetches
        still in flight; their results are discarded when they finish.
        """
        if not names:
            return {}

        pool = ThreadPoolExecutor(max_workers=len(names))
        try:
            futures = {pool.submit(self.load, name): name for name in names}
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        except BaseException:
            pool.shutdown(wait=False, cancel_futures=True)
            raise

        failed = [f for f in done if f.exception() is not None]
        if failed:
            pool.shutdown(wait=False, cancel_futures=True)
            # First error in request order wins among those already finished
            first = min(failed, key=lambda f: names.index(futures[f]))
            error = first.exception()
            self.logger.error(
                "Collection load failed, aborting initialisation",
                collection=futures[first],
                error=str(error),
            )
            raise error

        pool.shutdown(wait=True)
        return {futures[f]: f.result() for f in futures}

    def _fetch_remote(self, url: str) -> str:
        try:
            response = self.session.get(url, headers=NO_CACHE_HEADERS, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise TransportError(f"Failed to fetch {url}: {e}", path=url) from e

        if not response.ok:
            raise TransportError(
                f"Failed to load {url} ({response.status_code})",
                path=url,
                status_code=response.status_code,
            )
        return response.text

    def _read_local(self, path: str) -> str:
        file_path = Path(path)
        if not file_path.is_file():
            raise TransportError(f"Failed to load {path} (404)", path=path, status_code=404)
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TransportError(f"Failed to read {path}: {e}", path=path) from e

    def _validate_records(self, name: str, data: list) -> tuple:
        record_type = RECORD_TYPES.get(name)
        if record_type is None:
            self.logger.warning("No schema for collection, keeping raw records", collection=name)
            return tuple(data)

        records = []
        skipped = 0
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                skipped += 1
                self.logger.warning("Skipping non-object record", collection=name, index=i)
                continue
            try:
                records.append(record_type.model_validate(item))
            except PydanticValidationError as e:
                skipped += 1
                self.logger.warning(
                    "Skipping invalid record", collection=name, index=i, error=str(e)
                )

        if skipped:
            self.logger.warning(
                "Some records failed validation", collection=name, skipped=skipped, total=len(data)
            )
        return tuple(records)
