"""Shared pytest fixtures and fakes."""

import sys
from pathlib import Path

import pytest

ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from db import AclStoreError  # noqa: E402
from utils.acl import AccessList  # noqa: E402
from utils.flow import Conversation  # noqa: E402
from utils.sonarr import SonarrError  # noqa: E402
from utils.states import SessionStore  # noqa: E402


BREAKING_BAD = {
    "title": "Breaking Bad",
    "year": 2008,
    "tvdbId": 81189,
    "titleSlug": "breaking-bad",
    "seasons": [
        {"seasonNumber": 0, "monitored": False},
        {"seasonNumber": 1, "monitored": True},
        {"seasonNumber": 2, "monitored": True},
        {"seasonNumber": 3, "monitored": True},
    ],
}

BETTER_CALL_SAUL = {
    "title": "Better Call Saul",
    "year": 2015,
    "tvdbId": 273181,
    "titleSlug": "better-call-saul",
    "seasons": [{"seasonNumber": 1, "monitored": True}],
}


class FakeSonarr:
    """Stands in for SonarrAPI; set `fail` to the name of a method to make it raise."""

    def __init__(self):
        self.series = [BREAKING_BAD, BETTER_CALL_SAUL]
        self.profiles = [{"id": 1, "name": "Any"}, {"id": 6, "name": "HD-1080p"}]
        self.folders = [{"id": 1, "path": "/tv"}, {"id": 2, "path": "/media/anime"}]
        self.added = []
        self.commands = []
        self.fail = None

    def _check(self, name):
        if self.fail == name:
            raise SonarrError(f"{name} failed")

    async def lookup_series(self, term):
        self._check("lookup_series")
        return [s for s in self.series if term.lower() in s["title"].lower()]

    async def get_profiles(self):
        self._check("get_profiles")
        return self.profiles

    async def get_root_folders(self):
        self._check("get_root_folders")
        return self.folders

    async def add_series(self, payload):
        self._check("add_series")
        self.added.append(payload)
        return {"id": len(self.added), **payload}

    async def run_command(self, name):
        self._check("run_command")
        self.commands.append(name)
        return {"name": name}


class MemoryAclStore:
    def __init__(self, data=None, fail_save=False):
        self.data = data or {"allowed_users": [], "revoked_users": []}
        self.saves = []
        self.fail_save = fail_save

    async def load(self):
        return {k: list(v) for k, v in self.data.items()}

    async def save(self, data):
        if self.fail_save:
            raise AclStoreError("disk full")
        self.saves.append({k: list(v) for k, v in data.items()})
        self.data = data


@pytest.fixture
def sonarr():
    return FakeSonarr()


@pytest.fixture
def acl_store():
    return MemoryAclStore({
        "allowed_users": [
            {"id": 10, "display_name": "@alice"},
            {"id": 11, "display_name": "@bob"},
        ],
        "revoked_users": [{"id": 12, "display_name": "@mallory"}],
    })


@pytest.fixture
def acl(acl_store):
    return AccessList(acl_store, acl_store.data["allowed_users"], acl_store.data["revoked_users"])


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def flow(sonarr, sessions, acl):
    return Conversation(sonarr, sessions, acl)
