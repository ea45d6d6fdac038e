"""
Read-only views over a store snapshot: the operator inbox, a single
conversation transcript, and the open / unread indicators. Nothing here
mutates its inputs; call again after every store change.
"""

from typing import Optional

import pandas as pd

from models import Message, UserProfile
from triage import urgency_label

SORT_OPTIONS = ("urgency", "newest", "oldest")
STATUS_FILTERS = ("open", "resolved")


def _matches_search(msg: Message, users: dict[str, UserProfile], search_lower: str) -> bool:
    if not search_lower:
        return True
    user = users.get(msg.user_id)
    return (
        search_lower in msg.body.lower()
        or search_lower in msg.user_id.lower()
        or (user is not None and search_lower in user.name.lower())
    )


def filter_inbox(messages: list[Message], users: dict[str, UserProfile], search: str = "",
                 sort_option: str = "urgency", filter_status: str = "open") -> list[Message]:
    if sort_option not in SORT_OPTIONS:
        raise ValueError(f"sort_option must be one of: {', '.join(SORT_OPTIONS)}")
    if filter_status not in STATUS_FILTERS:
        raise ValueError(f"filter_status must be one of: {', '.join(STATUS_FILTERS)}")

    search_lower = (search or "").lower()
    filtered = [
        m for m in messages
        if m.status == filter_status and _matches_search(m, users, search_lower)
    ]

    if sort_option == "urgency":
        # Primary: urgency desc, secondary: newest first
        return sorted(filtered, key=lambda m: (m.urgency_score, m.timestamp), reverse=True)
    if sort_option == "newest":
        return sorted(filtered, key=lambda m: m.timestamp, reverse=True)
    return sorted(filtered, key=lambda m: m.timestamp)


def conversation_transcript(messages: list[Message], user_id: str) -> list[Message]:
    """Chat reading order: oldest first, whatever the inbox sort."""
    # Store snapshots are newest-insert first; reverse for arrival order on ties
    own = [m for m in reversed(messages) if m.user_id == user_id]
    return sorted(own, key=lambda m: m.timestamp)


def has_open_messages(messages: list[Message], user_id: Optional[str]) -> bool:
    if not user_id:
        return False
    return any(m.user_id == user_id and m.status == "open" for m in messages)


def unread_count(messages: list[Message], user_id: Optional[str] = None) -> int:
    return sum(
        1 for m in messages
        if m.direction == "inbound" and not m.is_read
        and (user_id is None or m.user_id == user_id)
    )


def message_stats(messages: list[Message]) -> dict:
    empty = {
        "total": 0,
        "status_counts": {},
        "urgency_distribution": {},
        "volume_over_time": [],
        "top_open_customers": {},
        "unread": 0,
    }
    if not messages:
        return empty

    df = pd.DataFrame([m.model_dump() for m in messages])
    inbound = df[df["direction"] == "inbound"].copy()

    # 1. Open / resolved split
    status_counts = df["status"].value_counts().to_dict()

    # 2. Badge distribution for inbound messages
    inbound["label"] = inbound["urgency_score"].apply(urgency_label)
    urgency_distribution = inbound["label"].value_counts().to_dict()

    # 3. Volume per day; rows with unparseable timestamps are left out
    df["date"] = pd.to_datetime(df["timestamp"], errors="coerce")
    df_vol = df.dropna(subset=["date"])
    if df_vol.empty:
        volume_over_time = []
    else:
        volume = df_vol.set_index("date").resample("D").size().rename("count").reset_index()
        volume["date"] = volume["date"].dt.strftime("%Y-%m-%d")
        volume_over_time = volume.to_dict(orient="records")

    # 4. Customers with the most open inbound messages
    open_inbound = inbound[inbound["status"] == "open"]
    top_open_customers = open_inbound["user_id"].value_counts().head(10).to_dict()

    return {
        "total": int(len(df)),
        "status_counts": {k: int(v) for k, v in status_counts.items()},
        "urgency_distribution": {k: int(v) for k, v in urgency_distribution.items()},
        "volume_over_time": [{"date": r["date"], "count": int(r["count"])} for r in volume_over_time],
        "top_open_customers": {k: int(v) for k, v in top_open_customers.items()},
        "unread": unread_count(messages),
    }
