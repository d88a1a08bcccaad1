"""Check repository contributors for deleted GitHub accounts"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from contributor_check.cache_store import CacheReadError, CacheStore, CacheWriteError
from contributor_check.config import (
    CACHE_DIR,
    DEFAULT_INTERVAL_MS,
    DEFAULT_REPOS,
    RETRY_MAX_ATTEMPTS,
    RunConfig,
    parse_targets,
)
from contributor_check.github import ContributorFetcher, ExistenceProber, FetchError, GitHubClient, build_session
from contributor_check.models import ContributorRecord, ExistenceResult, RepositoryTarget

logger = logging.getLogger("contributor-check")

SEPARATOR = "-" * 103


class RunOrchestrator:
    """Runs cache-or-fetch then probe for each configured repository"""

    def __init__(self, config: RunConfig, cache_store: CacheStore = None,
                 fetcher: ContributorFetcher = None, prober: ExistenceProber = None,
                 out=None):
        """
        Initialize the orchestrator

        Collaborators not passed in are built from the config.

        Args:
            config: Run configuration
            cache_store: Cache of contributor listings
            fetcher: Contributor listing fetcher
            prober: Account existence prober
            out: Stream for the report (defaults to stdout)
        """
        self.config = config
        self.cache_store = cache_store or CacheStore(config.cache_dir)
        self.fetcher = fetcher or ContributorFetcher(
            GitHubClient(config.token, proxy=config.proxy),
            interval=config.interval,
            max_attempts=config.max_attempts,
        )
        self.prober = prober or ExistenceProber(build_session(config.proxy), interval=config.interval)
        self.out = out

    def run(self, targets: List[RepositoryTarget] = None) -> Dict[str, List[str]]:
        """
        Process every target in order

        Args:
            targets: Repositories to check (defaults to config.targets)

        Returns:
            Dictionary mapping owner/repo to the logins that no longer exist,
            for every target that was processed
        """
        if targets is None:
            targets = self.config.targets

        missing = {}
        for target in targets:
            contributors = self._load_contributors(target)
            if contributors is None:
                continue

            self._print(f"Found {len(contributors)} contributors in repo {target}")
            missing[target.full_name] = self._probe_all(target, contributors)

        return missing

    def _load_contributors(self, target: RepositoryTarget) -> Optional[List[ContributorRecord]]:
        """Read the target from cache or fetch it; None means skip the target"""
        if self.config.use_cache and self.cache_store.exists(target):
            logger.info("Using local cache data for %s", target)
            try:
                return self.cache_store.load(target)
            except CacheReadError as e:
                logger.error("Load cache for %s failed, skipping: %s", target, e)
                return None

        try:
            contributors = self.fetcher.fetch(target, include_anonymous=self.config.include_anonymous)
        except FetchError as e:
            logger.error("Listing contributors of %s failed, skipping: %s", target, e)
            return None

        try:
            self.cache_store.save(target, contributors)
        except CacheWriteError as e:
            logger.error("Store cache for %s failed: %s", target, e)

        return contributors

    def _probe_all(self, target: RepositoryTarget, contributors: List[ContributorRecord]) -> List[str]:
        missing = []

        for rank, contributor in enumerate(contributors, start=1):
            if not contributor.is_anonymous:
                self._print(
                    f"{target}: order: {rank}, user: {contributor.login}[{contributor.id}], "
                    f"commits: {contributor.contributions}, home: {contributor.html_url}"
                )

            result = self.prober.probe(contributor)
            if result is ExistenceResult.NOT_FOUND:
                self._report_missing(contributor)
                missing.append(contributor.login)

        if missing:
            logger.info("%s: %d deleted accounts: %s", target, len(missing), ", ".join(missing))
        else:
            logger.info("%s: no deleted accounts found", target)

        return missing

    def _report_missing(self, contributor: ContributorRecord):
        self._print(SEPARATOR)
        self._print(f" FOUND A USER: {contributor.login} ".center(len(SEPARATOR), "-"))
        self._print(SEPARATOR)

    def _print(self, line: str):
        print(line, file=self.out or sys.stdout)


def build_config(args: argparse.Namespace) -> RunConfig:
    """
    Turn parsed CLI arguments into a RunConfig

    Raises:
        ValueError: If no token is available or a repository is malformed
    """
    token = args.token or os.getenv("GITHUB_TOKEN")
    if not token:
        raise ValueError("GITHUB_TOKEN environment variable not set")

    return RunConfig(
        token=token,
        targets=parse_targets(args.repo),
        interval_ms=args.interval,
        include_anonymous=args.anon,
        use_cache=args.use_cache,
        proxy=args.proxy or None,
        cache_dir=Path(args.cache_dir),
        max_attempts=args.max_attempts,
    )


def non_negative_int(value: str) -> int:
    """argparse type for millisecond intervals"""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find contributors whose GitHub accounts no longer exist")
    parser.add_argument("--repo", default=DEFAULT_REPOS, help="Repositories to check, comma-separated owner/repo")
    parser.add_argument("--interval", type=non_negative_int, default=DEFAULT_INTERVAL_MS, help="Pause between requests in ms")
    parser.add_argument("--anon", action="store_true", help="Include anonymous contributors")
    parser.add_argument("--token", help="GitHub token (defaults to GITHUB_TOKEN)")
    parser.add_argument("--proxy", help="Proxy URL for all HTTP traffic")
    parser.add_argument("--use-cache", action="store_true", help="Use cached contributor lists when present")
    parser.add_argument("--cache-dir", default=str(CACHE_DIR), help="Directory for cached contributor lists")
    parser.add_argument("--max-attempts", type=int, default=RETRY_MAX_ATTEMPTS,
                        help="Attempts per listing page before skipping a repository")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: List[str] = None):
    load_dotenv()
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = build_config(args)
    print(f"Checking repos: {[target.full_name for target in config.targets]}")

    missing = RunOrchestrator(config).run()
    total = sum(len(logins) for logins in missing.values())
    print(f"\nFound {total} deleted accounts across {len(missing)} repositories")


if __name__ == "__main__":
    main()
