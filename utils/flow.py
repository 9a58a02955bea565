import html
from dataclasses import dataclass
from typing import List, Optional
from db import AclStoreError
from log import get_logger
from utils.monitor import MONITOR_TYPES, apply_monitor_policy
from utils.sonarr import SonarrError
from utils.states import (
    State, SeriesSession, ProfileSession, FolderSession, MonitorSession,
    UserSelectSession, ConfirmSession, build_candidates, match_candidate,
)

logger = get_logger(__name__)

COMMAND_PREFIX = "/"

MONITOR_KEYBOARD = [["future", "all"], ["none", "latest"], ["first"]]
CONFIRM_KEYBOARD = [["NO"], ["yes"]]


@dataclass
class Reply:
    """Outbound chat message: text plus an optional one-time reply keyboard."""
    text: str
    keyboard: Optional[List[List[str]]] = None
    remove_keyboard: bool = False


def error_reply(text, remove_keyboard=False):
    return Reply(f"Oh no! Error: {text}", remove_keyboard=remove_keyboard)


def series_label(record):
    year = record.get("year")
    return f"{record['title']} - {year}" if year else record["title"]


def render_list(header, candidates, footer):
    lines = [f"<b>{header}</b>"]
    lines += [f"<b>{c.ordinal}</b>) {html.escape(c.label)}" for c in candidates]
    lines.append(f"\n{footer}")
    return "\n".join(lines)


def as_keyboard(candidates):
    return [[c.label] for c in candidates]


class Conversation:
    """
    Per-user add-series and revoke/unrevoke wizards.

    Each inbound reply goes through handle(), which looks up the user's
    session, checks it is the variant its state promises and hands it to the
    step for that state. Steps never raise: Sonarr and storage failures come
    back as error replies.
    """

    def __init__(self, sonarr, sessions, acl, max_results=0):
        self.sonarr = sonarr
        self.sessions = sessions
        self.acl = acl
        self.max_results = max_results

        self._steps = {
            State.AWAITING_SERIES: (SeriesSession, self._on_series),
            State.AWAITING_PROFILE: (ProfileSession, self._on_profile),
            State.AWAITING_FOLDER: (FolderSession, self._on_folder),
            State.AWAITING_MONITOR_TYPE: (MonitorSession, self._on_monitor),
            State.REVOKE_SELECT: (UserSelectSession, self._on_user_select),
            State.UNREVOKE_SELECT: (UserSelectSession, self._on_user_select),
            State.REVOKE_CONFIRM: (ConfirmSession, self._on_confirm),
            State.UNREVOKE_CONFIRM: (ConfirmSession, self._on_confirm),
        }

    # --- Entry points ---

    async def search(self, user_id, term):
        term = term.strip()
        try:
            results = await self.sonarr.lookup_series(term)
        except SonarrError as e:
            logger.error(f"Series lookup for '{term}' failed: {e}")
            return error_reply("could not reach Sonarr, try searching again")

        if not results:
            return error_reply(f"could not find {html.escape(term)}, try searching again")

        logger.info(f"{user_id} requested to search for series {term}")

        candidates = build_candidates(results, series_label, self.max_results)
        self.sessions.set(user_id, SeriesSession(candidates))

        text = render_list(f"Found {len(candidates)} series:", candidates, "Select a series to continue...")
        return Reply(text, keyboard=as_keyboard(candidates))

    def start_revoke(self, user_id):
        return self._start_user_select(
            user_id, State.REVOKE_SELECT, self.acl.allowed_users,
            "There aren't any allowed users.", "Select a user to revoke:",
        )

    def start_unrevoke(self, user_id):
        return self._start_user_select(
            user_id, State.UNREVOKE_SELECT, self.acl.revoked_users,
            "There aren't any revoked users.", "Select a user to unrevoke:",
        )

    def clear(self, user_id):
        self.sessions.delete(user_id)
        return Reply("All previously sent commands have been cleared.", remove_keyboard=True)

    # --- Dispatch ---

    async def handle(self, user_id, text):
        """Route a reply to the current step. Returns None when it is not ours."""
        session = self.sessions.get(user_id)
        is_command = text.startswith(COMMAND_PREFIX)

        if session is None:
            if is_command:
                return None
            return error_reply("no search in progress or it has expired, use <code>/q [series name]</code> to search again")

        # Folder paths may start with the command prefix
        if is_command and session.state != State.AWAITING_FOLDER:
            return None

        expected, step = self._steps.get(session.state, (None, None))
        if step is None or not isinstance(session, expected):
            logger.warning(f"Corrupted session for {user_id}: {session!r}")
            self.sessions.delete(user_id)
            return error_reply("something went wrong, try searching again", remove_keyboard=True)

        return await step(user_id, session, text)

    # --- Add-series steps ---

    async def _on_series(self, user_id, session, text):
        series = match_candidate(session.series, text)
        if series is None:
            return error_reply("could not find the series with that name, try again")

        try:
            profiles = await self.sonarr.get_profiles()
        except SonarrError as e:
            logger.error(f"Fetching profiles failed: {e}")
            return error_reply("could not get profiles, try searching again")
        if not profiles:
            return error_reply("could not get profiles, try searching again")

        logger.info(f"{user_id} selected series {series.label}")

        candidates = build_candidates(profiles, lambda p: p["name"])
        self.sessions.set(user_id, ProfileSession(series, candidates))

        text = render_list(f"Found {len(candidates)} profiles:", candidates, "Select a profile to continue...")
        return Reply(text, keyboard=as_keyboard(candidates))

    async def _on_profile(self, user_id, session, text):
        profile = match_candidate(session.profiles, text)
        if profile is None:
            return error_reply("could not find the profile with that name, try again")

        try:
            folders = await self.sonarr.get_root_folders()
        except SonarrError as e:
            logger.error(f"Fetching root folders failed: {e}")
            return error_reply("could not get folders, try searching again")
        if not folders:
            return error_reply("could not get folders, try searching again")

        logger.info(f"{user_id} selected profile {profile.label}")

        candidates = build_candidates(folders, lambda f: f["path"])
        self.sessions.set(user_id, FolderSession(session.series, profile, candidates))

        text = render_list(f"Found {len(candidates)} folders:", candidates, "Select a folder to continue...")
        return Reply(text, keyboard=as_keyboard(candidates))

    async def _on_folder(self, user_id, session, text):
        folder = match_candidate(session.folders, text)
        if folder is None:
            return error_reply("could not find the folder with that path, try again")

        logger.info(f"{user_id} selected folder {folder.label}")

        candidates = build_candidates(MONITOR_TYPES, str)
        self.sessions.set(user_id, MonitorSession(session.series, session.profile, folder, candidates))

        text = render_list("Select which seasons to monitor:", candidates, "Select a monitor type to continue...")
        return Reply(text, keyboard=MONITOR_KEYBOARD)

    async def _on_monitor(self, user_id, session, text):
        monitor = match_candidate(session.monitors, text)
        if monitor is None:
            return error_reply("could not find that monitor type, try again")

        series = session.series.record
        try:
            seasons, add_options = apply_monitor_policy(monitor.record, series.get("seasons", []))
            payload = {
                "tvdbId": series["tvdbId"],
                "title": series["title"],
                "titleSlug": series["titleSlug"],
                "seasons": seasons,
                "rootFolderPath": session.folder.record["path"],
                "seasonFolder": True,
                "monitored": True,
                "seriesType": "standard",
                "qualityProfileId": session.profile.record["id"],
            }
            if add_options is not None:
                payload["addOptions"] = add_options

            await self.sonarr.add_series(payload)
            logger.info(f"{user_id} added series {series['title']} (monitor: {monitor.record})")
            return Reply(f"Series <code>{html.escape(series['title'])}</code> added", remove_keyboard=True)
        except (SonarrError, KeyError) as e:
            logger.error(f"Adding series {series.get('title')} failed: {e}")
            return error_reply("could not add series, try searching again", remove_keyboard=True)
        finally:
            self.sessions.delete(user_id)

    # --- Revoke / unrevoke steps ---

    def _start_user_select(self, user_id, state, users, empty_text, prompt):
        if not users:
            return Reply(empty_text)
        candidates = build_candidates(users, lambda u: u["display_name"])
        self.sessions.set(user_id, UserSelectSession(state, candidates))
        return Reply(render_list(prompt, candidates, "Select a user to continue..."), keyboard=as_keyboard(candidates))

    async def _on_user_select(self, user_id, session, text):
        target = match_candidate(session.users, text)
        if target is None:
            return error_reply("could not find a user with that name, try again")

        if session.state == State.REVOKE_SELECT:
            next_state, verb = State.REVOKE_CONFIRM, "revoke"
        else:
            next_state, verb = State.UNREVOKE_CONFIRM, "unrevoke"

        self.sessions.set(user_id, ConfirmSession(next_state, target))
        return Reply(f"Are you sure you want to {verb} access for {html.escape(target.label)}?", keyboard=CONFIRM_KEYBOARD)

    async def _on_confirm(self, user_id, session, text):
        answer = text.strip().lower()
        target = session.target
        verb = "revoked" if session.state == State.REVOKE_CONFIRM else "unrevoked"

        if answer == "no":
            self.sessions.delete(user_id)
            return Reply(f"Access for {html.escape(target.label)} has NOT been {verb}.", remove_keyboard=True)
        if answer != "yes":
            return Reply("Please reply with yes or no.", keyboard=CONFIRM_KEYBOARD)

        try:
            if session.state == State.REVOKE_CONFIRM:
                user = await self.acl.revoke(target.record["id"])
            else:
                user = await self.acl.unrevoke(target.record["id"])
        except AclStoreError:
            return error_reply("could not save the access list", remove_keyboard=True)
        finally:
            self.sessions.delete(user_id)

        if user is None:
            return error_reply(f"{html.escape(target.label)} is no longer in that list", remove_keyboard=True)
        return Reply(f"Access for {html.escape(target.label)} has been {verb}.", remove_keyboard=True)
