"""Disk cache of contributor listings, one JSON file per repository"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from contributor_check.config import CACHE_DIR, CACHE_SCHEMA_VERSION
from contributor_check.models import ContributorRecord, RepositoryTarget

logger = logging.getLogger("contributor-check.cache")


class CacheReadError(Exception):
    """Cache file is missing, unreadable or not valid JSON"""


class CacheSchemaError(CacheReadError):
    """Cache file parsed but does not match the current record schema"""


class CacheWriteError(Exception):
    """Cache file could not be written"""


class CacheStore:
    """Reads and writes per-repository contributor snapshots"""

    def __init__(self, cache_dir: Path = CACHE_DIR):
        self.cache_dir = Path(cache_dir)

    def path_for(self, target: RepositoryTarget) -> Path:
        """Cache file for a target, e.g. golang__go.json"""
        return self.cache_dir / f"{target.owner}__{target.repo}.json"

    def exists(self, target: RepositoryTarget) -> bool:
        return self.path_for(target).is_file()

    def load(self, target: RepositoryTarget) -> List[ContributorRecord]:
        """
        Load the cached contributor list for a target

        Args:
            target: Repository whose snapshot to read

        Returns:
            Contributor records in the order they were saved

        Raises:
            CacheReadError: If the file is missing, unreadable or not JSON
            CacheSchemaError: If the document has an unexpected shape or version
        """
        cache_file = self.path_for(target)

        try:
            with open(cache_file, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheReadError(f"Could not read cache file {cache_file}: {e}") from e

        if not isinstance(document, dict):
            raise CacheSchemaError(f"Cache file {cache_file} is not a versioned cache document")

        version = document.get("schema_version")
        if version != CACHE_SCHEMA_VERSION:
            raise CacheSchemaError(
                f"Cache file {cache_file} has schema version {version!r}, "
                f"expected {CACHE_SCHEMA_VERSION}"
            )

        contributors = document.get("contributors")
        if not isinstance(contributors, list):
            raise CacheSchemaError(f"Cache file {cache_file} has no contributor list")

        try:
            records = [ContributorRecord.from_api(item) for item in contributors]
        except (TypeError, ValueError) as e:
            raise CacheSchemaError(f"Cache file {cache_file} has an invalid record: {e}") from e

        logger.debug("Loaded %d contributors from %s", len(records), cache_file)
        return records

    def save(self, target: RepositoryTarget, records: List[ContributorRecord]) -> Path:
        """
        Write the full contributor list for a target, replacing any previous file

        Returns:
            Path of the written cache file

        Raises:
            CacheWriteError: On any I/O or serialization failure
        """
        cache_file = self.path_for(target)
        document = {
            "schema_version": CACHE_SCHEMA_VERSION,
            "repository": target.full_name,
            "fetched_at": datetime.now(timezone.utc).isoformat(),
            "contributors": [record.to_dict() for record in records],
        }

        try:
            payload = json.dumps(document, indent=2)
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(cache_file, "w", encoding="utf-8") as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(f"Could not write cache file {cache_file}: {e}") from e

        logger.info("Cached %d contributors to %s", len(records), cache_file)
        return cache_file
