import copy

# Keyboard order for the monitor-type step
MONITOR_TYPES = ["future", "all", "none", "latest", "first"]

def apply_monitor_policy(monitor, seasons):
    """
    Work out which seasons Sonarr should monitor for a monitor-type keyword.

    Returns (seasons, add_options). `seasons` is a copy of the input with the
    `monitored` flags set; the caller's list is left untouched. add_options is
    None unless the keyword controls back-filling of existing episodes.
    Season 0 holds specials and never counts as the first season.
    """
    if monitor not in MONITOR_TYPES:
        raise ValueError(f"Unknown monitor type: {monitor}")

    seasons = copy.deepcopy(seasons)

    if monitor == "future":
        return seasons, {"ignoreEpisodesWithFiles": True, "ignoreEpisodesWithoutFiles": True}

    if monitor == "all":
        return seasons, {"ignoreEpisodesWithFiles": False, "ignoreEpisodesWithoutFiles": False}

    if not seasons:
        return seasons, None

    last = max(s["seasonNumber"] for s in seasons)

    if monitor == "latest":
        for season in seasons:
            season["monitored"] = season["seasonNumber"] >= last
        return seasons, None

    # none / first: nothing exceeds the last season, so everything goes off
    for season in seasons:
        season["monitored"] = season["seasonNumber"] >= last + 1

    if monitor == "first":
        numbered = [s["seasonNumber"] for s in seasons if s["seasonNumber"] != 0]
        if numbered:
            first = min(numbered)
            for season in seasons:
                if season["seasonNumber"] == first:
                    season["monitored"] = not season["monitored"]

    return seasons, None
