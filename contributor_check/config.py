"""Centralized configuration for the contributor checker"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from contributor_check.models import RepositoryTarget


# =============================================================================
# Base Paths
# =============================================================================

DATA_DIR = Path("data")
CACHE_DIR = DATA_DIR / "cache" / "contributors"


# =============================================================================
# GitHub Configuration
# =============================================================================

# API
GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "contributor-check"

# Repositories checked when --repo is not given
DEFAULT_REPOS = "golang/go"

# Listing pagination
CONTRIBUTORS_PER_PAGE = 100

# Seconds before giving up on a single request
REQUEST_TIMEOUT = 30


# =============================================================================
# Throttling / Retry Configuration
# =============================================================================

# Pause between requests, in milliseconds
DEFAULT_INTERVAL_MS = 1000

# Listing retries: delay doubles from RETRY_BACKOFF up to RETRY_MAX_BACKOFF
RETRY_BACKOFF = 3.0
RETRY_MAX_BACKOFF = 60.0
RETRY_MAX_ATTEMPTS = 10


# =============================================================================
# Cache Configuration
# =============================================================================

CACHE_SCHEMA_VERSION = 1


@dataclass
class RunConfig:
    """Everything one run of the checker needs"""
    token: str
    targets: List[RepositoryTarget] = field(default_factory=list)
    interval_ms: int = DEFAULT_INTERVAL_MS
    include_anonymous: bool = False
    use_cache: bool = False
    proxy: Optional[str] = None
    cache_dir: Path = CACHE_DIR
    max_attempts: int = RETRY_MAX_ATTEMPTS

    @property
    def interval(self) -> float:
        """Inter-request pause in seconds"""
        return self.interval_ms / 1000.0


def parse_targets(repos: str) -> List[RepositoryTarget]:
    """
    Parse a comma-separated list of owner/repo pairs

    Empty entries (e.g. a trailing comma) are ignored.

    Raises:
        ValueError: If an entry is not of the form owner/repo
    """
    return [RepositoryTarget.parse(item) for item in repos.split(",") if item.strip()]
