"""GitHub contributor listing and account probing"""

from .client import GitHubClient, build_session
from .contributor_fetcher import ContributorFetcher, FetchError
from .existence_prober import ExistenceProber
