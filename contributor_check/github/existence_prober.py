"""Check whether contributor accounts still resolve on GitHub"""

import logging
import time
from typing import Callable

import requests

from contributor_check.config import REQUEST_TIMEOUT
from contributor_check.models import ContributorRecord, ExistenceResult

logger = logging.getLogger("contributor-check.prober")


class ExistenceProber:
    """Probes public profile pages; a 404 means the account is gone"""

    def __init__(self, session: requests.Session, interval: float = 1.0,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            session: Unauthenticated session (proxy settings only)
            interval: Seconds to pause after every profile request
            sleep: Sleep function, replaced in tests
        """
        self.session = session
        self.interval = interval
        self.sleep = sleep

    def probe(self, record: ContributorRecord) -> ExistenceResult:
        """
        Probe one contributor

        Anonymous contributors and bot accounts are never requested.

        Returns:
            ExistenceResult for the record
        """
        if record.is_anonymous:
            logger.info("Anonymous contributor: name=%s email=%s commits=%d",
                        record.name, record.email, record.contributions)
            return ExistenceResult.SKIPPED

        if record.is_bot:
            logger.debug("Skipping bot account %s", record.login)
            return ExistenceResult.SKIPPED

        try:
            response = self.session.get(record.profile_url, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.error("Profile lookup for %s failed: %s", record.login, e)
            self.sleep(self.interval)
            return ExistenceResult.UNKNOWN

        self.sleep(self.interval)
        return self._classify(record, response.status_code)

    @staticmethod
    def _classify(record: ContributorRecord, status_code: int) -> ExistenceResult:
        if status_code == 404:
            return ExistenceResult.NOT_FOUND
        if status_code < 400:
            return ExistenceResult.EXISTS

        # Rate limits (429) and server errors say nothing about the account
        logger.warning("Unexpected status %d probing %s, result unknown",
                       status_code, record.login)
        return ExistenceResult.UNKNOWN
