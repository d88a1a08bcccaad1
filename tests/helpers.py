"""Fake HTTP objects shared by the test modules"""

import json

import requests


def named(login, id_, contributions=1):
    return {
        "login": login,
        "id": id_,
        "type": "User",
        "html_url": f"https://github.com/{login}",
        "contributions": contributions,
    }


def anonymous(name, email, contributions=1):
    return {"type": "Anonymous", "name": name, "email": email, "contributions": contributions}


def contributor_pages(total, per_page=100, start_id=1):
    """Split `total` named contributors into API-sized pages"""
    users = [named(f"user{i}", i, contributions=total - i + 1) for i in range(start_id, start_id + total)]
    return [users[i:i + per_page] for i in range(0, total, per_page)] or [[]]


class FakeResponse:
    """Just enough of requests.Response for the client code"""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.content = b"" if payload is None else json.dumps(payload).encode()

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """
    Records GET calls and replays scripted outcomes

    Each item in `outcomes` is a FakeResponse or an exception instance to raise.
    When `outcomes` is a dict it maps URLs to outcomes instead.
    """

    def __init__(self, outcomes=None, default=None):
        self.outcomes = outcomes if outcomes is not None else []
        self.default = default
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": dict(params or {})})

        if isinstance(self.outcomes, dict):
            outcome = self.outcomes.get(url, self.default)
        elif self.outcomes:
            outcome = self.outcomes.pop(0)
        else:
            outcome = self.default

        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Stands in for time.sleep"""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)
