"""
In-memory conversation store.

Holds the message set and the customer profiles. All writes go through
append / mark_as_read / resolve_message / resolve_conversation, each run
under one lock so a reader never sees half an update. Messages are
replaced, never edited in place, so snapshots returned to callers stay
stable.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from models import Message, UserProfile
from preprocess import load_batch, parse_batch
from profiles import generate_profile
from triage import URGENCY_LABELS, calculate_urgency

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CRITICAL_THRESHOLD = URGENCY_LABELS[0][0]


class ConversationStore:
    def __init__(self, messages: Optional[Iterable[Message]] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self._lock = threading.RLock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._messages: list[Message] = list(messages or [])
        self._users: dict[str, UserProfile] = {}
        for msg in self._messages:
            self.ensure_profile(msg.user_id)

    @classmethod
    def from_csv(cls, raw_text: str, **kwargs) -> "ConversationStore":
        return cls(parse_batch(raw_text).messages, **kwargs)

    @classmethod
    def from_file(cls, path, **kwargs) -> "ConversationStore":
        return cls(load_batch(path).messages, **kwargs)

    # ── Reads ─────────────────────────────────────────────────────────────────

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the message set, newest insert first."""
        with self._lock:
            return list(self._messages)

    @property
    def users(self) -> dict[str, UserProfile]:
        with self._lock:
            return dict(self._users)

    def get_message(self, message_id: str) -> Optional[Message]:
        with self._lock:
            return next((m for m in self._messages if m.id == message_id), None)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        with self._lock:
            return self._users.get(user_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    # ── Writes ────────────────────────────────────────────────────────────────

    def ensure_profile(self, user_id: str) -> UserProfile:
        with self._lock:
            profile = self._users.get(user_id)
            if profile is None:
                profile = generate_profile(user_id)
                self._users[user_id] = profile
                logger.debug("Created profile for customer %s", user_id)
            return profile

    def append(self, user_id: str, body: str, direction: str = "inbound",
               agent_id: Optional[str] = None) -> Message:
        inbound = direction == "inbound"
        with self._lock:
            msg = Message(
                id=f"msg_{uuid.uuid4().hex}",
                user_id=user_id,
                timestamp=self._clock().strftime(TIMESTAMP_FORMAT),
                body=body,
                direction=direction,
                urgency_score=calculate_urgency(body) if inbound else 0,
                is_read=not inbound,
                status="open",
                agent_id=agent_id,
            )
            self._messages.insert(0, msg)
            self.ensure_profile(user_id)

        if inbound and msg.urgency_score >= CRITICAL_THRESHOLD:
            logger.info("Critical message %s from customer %s (score=%d)",
                        msg.id, user_id, msg.urgency_score)
        else:
            logger.debug("Appended %s message %s for customer %s", direction, msg.id, user_id)
        return msg

    def _replace(self, predicate, **update) -> list[Message]:
        changed = []
        with self._lock:
            for i, msg in enumerate(self._messages):
                if predicate(msg):
                    self._messages[i] = msg.model_copy(update=update)
                    changed.append(self._messages[i])
        return changed

    def mark_as_read(self, message_id: str) -> Optional[Message]:
        """Returns the updated message, or None if nothing changed."""
        changed = self._replace(lambda m: m.id == message_id and not m.is_read, is_read=True)
        if changed:
            logger.debug("Marked %s as read", message_id)
        return changed[0] if changed else None

    def resolve_message(self, message_id: str) -> Optional[Message]:
        changed = self._replace(lambda m: m.id == message_id and m.status == "open", status="resolved")
        if changed:
            logger.debug("Resolved message %s", message_id)
        return changed[0] if changed else None

    def resolve_conversation(self, user_id: str) -> int:
        """Resolves every open message of a customer; returns how many changed."""
        changed = self._replace(lambda m: m.user_id == user_id and m.status == "open", status="resolved")
        if changed:
            logger.info("Resolved conversation %s (%d message(s))", user_id, len(changed))
        return len(changed)
