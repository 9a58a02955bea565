import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class State(str, Enum):
    # Add-series wizard
    AWAITING_SERIES = "awaiting_series"
    AWAITING_PROFILE = "awaiting_profile"
    AWAITING_FOLDER = "awaiting_folder"
    AWAITING_MONITOR_TYPE = "awaiting_monitor_type"

    # Owner revoke / unrevoke wizard
    REVOKE_SELECT = "revoke_select"
    REVOKE_CONFIRM = "revoke_confirm"
    UNREVOKE_SELECT = "unrevoke_select"
    UNREVOKE_CONFIRM = "unrevoke_confirm"


@dataclass
class Candidate:
    """One numbered entry of a selection list shown to the user."""
    ordinal: int
    label: str
    record: Any


def build_candidates(records, label_of, limit=0) -> List[Candidate]:
    if limit:
        records = records[:limit]
    return [Candidate(i, label_of(r), r) for i, r in enumerate(records, start=1)]


def match_candidate(candidates, text) -> Optional[Candidate]:
    """Find the candidate whose label equals the reply, falling back to its number."""
    text = text.strip()
    for c in candidates:
        if c.label == text:
            return c
    if text.isdecimal():
        for c in candidates:
            if c.ordinal == int(text):
                return c
    return None


# --- Session variants ---
# A user's session is exactly one of these; the step handler for a state only
# ever sees the variant carrying the fields that state needs.

@dataclass
class SeriesSession:
    series: List[Candidate]
    state: State = field(default=State.AWAITING_SERIES, init=False)


@dataclass
class ProfileSession:
    series: Candidate
    profiles: List[Candidate]
    state: State = field(default=State.AWAITING_PROFILE, init=False)


@dataclass
class FolderSession:
    series: Candidate
    profile: Candidate
    folders: List[Candidate]
    state: State = field(default=State.AWAITING_FOLDER, init=False)


@dataclass
class MonitorSession:
    series: Candidate
    profile: Candidate
    folder: Candidate
    monitors: List[Candidate]
    state: State = field(default=State.AWAITING_MONITOR_TYPE, init=False)


@dataclass
class UserSelectSession:
    state: State  # REVOKE_SELECT or UNREVOKE_SELECT
    users: List[Candidate]


@dataclass
class ConfirmSession:
    state: State  # REVOKE_CONFIRM or UNREVOKE_CONFIRM
    target: Candidate


class SessionStore:
    """
    Ephemeral per-user session storage.

    Key: (user_id, topic)
    Value: (session, expires_at or None)

    Entries past their expiry read as absent and are dropped lazily, or in
    bulk by purge_expired(). Nothing here survives a restart.
    """

    def __init__(self, ttl=0, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._data = {}

    def get(self, user_id, topic="flow"):
        entry = self._data.get((user_id, topic))
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[(user_id, topic)]
            return None
        return value

    def set(self, user_id, value, topic="flow", ttl=None):
        ttl = self.ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl else None
        self._data[(user_id, topic)] = (value, expires_at)

    def delete(self, user_id, topic="flow"):
        self._data.pop((user_id, topic), None)

    def purge_expired(self):
        now = self._clock()
        expired = [k for k, (_, exp) in self._data.items() if exp is not None and now >= exp]
        for key in expired:
            del self._data[key]
        return len(expired)

    def __len__(self):
        return len(self._data)
