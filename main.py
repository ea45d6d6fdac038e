import logging
import threading
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, field_validator

import config
from store import ConversationStore
from views import (
    conversation_transcript,
    filter_inbox,
    has_open_messages,
    message_stats,
    unread_count,
)

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title="SupportTriage API")

# ── Store ─────────────────────────────────────────────────────────────────────
_store: Optional[ConversationStore] = None
_store_lock = threading.Lock()


def _load_store() -> ConversationStore:
    """Load the batch at DATA_PATH. A missing file gives an empty inbox."""
    if not config.DATA_PATH.exists():
        logger.warning("No message batch at %s, starting with an empty store", config.DATA_PATH)
        return ConversationStore()
    return ConversationStore.from_file(config.DATA_PATH)


def get_store() -> ConversationStore:
    global _store
    if _store is None:
        with _store_lock:
            # Concurrent first requests must share one store
            if _store is None:
                _store = _load_store()
    return _store


# ── Request bodies ────────────────────────────────────────────────────────────

def _not_blank(v: str, field: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{field} must not be empty")
    return v


class IncomingMessage(BaseModel):
    user_id: str
    body: str

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        return _not_blank(v, "user_id").strip()

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        return _not_blank(v, "body")


class ReplyRequest(BaseModel):
    body: str
    agent_id: Optional[str] = None

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        return _not_blank(v, "body")


# ── Meta ──────────────────────────────────────────────────────────────────────

@app.get("/", tags=["Meta"])
def read_root(store: ConversationStore = Depends(get_store)):
    return {
        "service": "SupportTriage API",
        "messages": len(store),
        "endpoints": [
            "/inbox", "/conversations/{user_id}", "/messages",
            "/agents", "/canned-responses", "/stats", "/docs",
        ],
    }


@app.get("/agents", tags=["Meta"])
def list_agents():
    return [a.model_dump() for a in config.AGENTS]


@app.get("/canned-responses", tags=["Meta"])
def list_canned_responses():
    return [c.model_dump() for c in config.CANNED_RESPONSES]


# ── Inbox & conversations ─────────────────────────────────────────────────────

@app.get("/inbox", tags=["Core"])
def get_inbox(
    search: str = Query("", description="Matches message body, customer id or customer name"),
    sort: str = Query("urgency", description="urgency | newest | oldest"),
    status: str = Query("open", description="open | resolved"),
    store: ConversationStore = Depends(get_store),
):
    try:
        inbox = filter_inbox(store.messages, store.users, search, sort, status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "count": len(inbox),
        "unread": unread_count(inbox),
        "results": [m.model_dump() for m in inbox],
    }


@app.get("/conversations/{user_id}", tags=["Core"])
def get_conversation(user_id: str, store: ConversationStore = Depends(get_store)):
    messages = store.messages
    transcript = conversation_transcript(messages, user_id)
    if not transcript:
        raise HTTPException(status_code=404, detail=f"No conversation for customer {user_id}.")
    return {
        "user": store.get_profile(user_id).model_dump(),
        "is_open": has_open_messages(messages, user_id),
        "unread": unread_count(messages, user_id),
        "messages": [m.model_dump() for m in transcript],
    }


@app.post("/conversations/{user_id}/reply", tags=["Actions"])
def reply(user_id: str, req: ReplyRequest, store: ConversationStore = Depends(get_store)):
    msg = store.append(user_id, req.body, "outbound", req.agent_id)
    return {"message": msg.model_dump()}


@app.post("/conversations/{user_id}/resolve", tags=["Actions"])
def resolve_conversation(user_id: str, store: ConversationStore = Depends(get_store)):
    resolved = store.resolve_conversation(user_id)
    return {
        "resolved": resolved,
        "is_open": has_open_messages(store.messages, user_id),
    }


# ── Messages ──────────────────────────────────────────────────────────────────

@app.post("/messages", tags=["Actions"])
def simulate_incoming(req: IncomingMessage, store: ConversationStore = Depends(get_store)):
    msg = store.append(req.user_id, req.body, "inbound")
    return {"message": msg.model_dump()}


@app.post("/messages/{message_id}/read", tags=["Actions"])
def mark_as_read(message_id: str, store: ConversationStore = Depends(get_store)):
    store.mark_as_read(message_id)
    msg = store.get_message(message_id)
    return {"message": msg.model_dump() if msg else None}


@app.post("/messages/{message_id}/resolve", tags=["Actions"])
def resolve_message(message_id: str, store: ConversationStore = Depends(get_store)):
    store.resolve_message(message_id)
    msg = store.get_message(message_id)
    return {"message": msg.model_dump() if msg else None}


# ── Stats ─────────────────────────────────────────────────────────────────────

@app.get("/stats", tags=["Core"])
def get_stats(store: ConversationStore = Depends(get_store)):
    return message_stats(store.messages)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
