"""Fetch the complete contributor listing of a repository"""

import logging
import time
from typing import Callable, List

import requests

from contributor_check.config import (
    CONTRIBUTORS_PER_PAGE,
    RETRY_BACKOFF,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_BACKOFF,
)
from contributor_check.github.client import GitHubClient
from contributor_check.models import ContributorRecord, RepositoryTarget

logger = logging.getLogger("contributor-check.fetcher")


class FetchError(Exception):
    """A listing page kept failing after every retry"""


class ContributorFetcher:
    """Pages through /repos/{owner}/{repo}/contributors until the last page"""

    def __init__(self, client: GitHubClient, interval: float = 1.0,
                 max_attempts: int = RETRY_MAX_ATTEMPTS,
                 backoff: float = RETRY_BACKOFF,
                 max_backoff: float = RETRY_MAX_BACKOFF,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            client: Authenticated GitHub client
            interval: Seconds to pause between successful page requests
            max_attempts: Consecutive failures of one page before giving up
            backoff: Delay in seconds after the first failure, doubled after each further one
            max_backoff: Upper bound on the retry delay
            sleep: Sleep function, replaced in tests
        """
        self.client = client
        self.interval = interval
        self.max_attempts = max(1, max_attempts)
        self.backoff = backoff
        self.max_backoff = max_backoff
        self.sleep = sleep

    def fetch(self, target: RepositoryTarget, include_anonymous: bool = False) -> List[ContributorRecord]:
        """
        Fetch every contributor of a repository, in API order

        An empty list means the repository was listed successfully and has
        no contributors; a listing that never succeeded raises instead.

        Raises:
            FetchError: If a page failed max_attempts times in a row
        """
        contributors = []
        page = 1

        while True:
            batch = self._fetch_page(target, page, include_anonymous)
            contributors.extend(batch)
            logger.info("Fetched page %d of %s (%d contributors, total so far: %d)",
                        page, target, len(batch), len(contributors))

            if len(batch) < CONTRIBUTORS_PER_PAGE:
                break

            page += 1
            self.sleep(self.interval)

        return contributors

    def _fetch_page(self, target: RepositoryTarget, page: int,
                    include_anonymous: bool) -> List[ContributorRecord]:
        """Fetch one page, retrying the same page number with exponential backoff"""
        endpoint = f"/repos/{target.owner}/{target.repo}/contributors"
        params = {
            "anon": "true" if include_anonymous else "false",
            "per_page": CONTRIBUTORS_PER_PAGE,
            "page": page,
        }

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self.client.get(endpoint, params)
                return self._parse_page(response)
            except (requests.RequestException, TypeError, ValueError) as e:
                logger.error("Listing contributors of %s failed (page %d, attempt %d/%d): %s",
                             target, page, attempt, self.max_attempts, e)
                if attempt == self.max_attempts:
                    raise FetchError(
                        f"Giving up on {target} page {page} after {attempt} attempts: {e}"
                    ) from e
                self.sleep(self._retry_delay(attempt))

    def _retry_delay(self, attempt: int) -> float:
        return min(self.backoff * 2 ** (attempt - 1), self.max_backoff)

    @staticmethod
    def _parse_page(response: requests.Response) -> List[ContributorRecord]:
        # 204 is how GitHub answers for an empty repository
        if response.status_code == 204 or not response.content:
            return []

        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of contributors, got {type(data).__name__}")

        return [ContributorRecord.from_api(item) for item in data]
