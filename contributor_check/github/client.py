"""Minimal GitHub REST client"""

import logging
from typing import Optional

import requests

from contributor_check.config import GITHUB_API_URL, REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger("contributor-check.client")


def build_session(proxy: Optional[str] = None) -> requests.Session:
    """
    Create a session, optionally routing all traffic through a proxy

    Args:
        proxy: Proxy URL (e.g. http://127.0.0.1:7890) or None

    Returns:
        requests.Session with no credentials attached
    """
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
        logger.debug("Routing HTTP traffic through proxy %s", proxy)
    return session


class GitHubClient:
    """GitHub REST client with bearer token auth"""

    def __init__(self, token: str, proxy: Optional[str] = None,
                 base_url: str = GITHUB_API_URL, session: requests.Session = None):
        """
        Initialize GitHub client

        Args:
            token: GitHub personal access token
            proxy: Optional proxy URL for all API requests
            base_url: API root, overridable for GitHub Enterprise
            session: Pre-built session (tests inject a fake here)
        """
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else build_session(proxy)
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }

    def get(self, endpoint: str, params: dict = None) -> requests.Response:
        """
        Make a GET request to the GitHub API

        Args:
            endpoint: API path (e.g., /repos/golang/go/contributors)
            params: Query parameters

        Returns:
            The response, already checked for an error status

        Raises:
            requests.RequestException: On transport errors and 4xx/5xx statuses
        """
        url = f"{self.base_url}{endpoint}"
        response = self.session.get(
            url,
            headers=self.headers,
            params=params,
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        return response
