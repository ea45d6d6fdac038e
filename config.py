import os
from pathlib import Path

from models import Agent, CannedResponse

BASE_DIR = Path(__file__).parent

# Batch loaded into the store at API startup - override for Docker / demos
DATA_PATH = Path(os.getenv("TRIAGE_DATA_PATH", BASE_DIR / "data" / "messages.csv"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"

AGENTS = [
    Agent(
        id="agent_1",
        name="Grace Wanjiku",
        avatar="https://picsum.photos/seed/agent_1/200/200",
        email="grace@support.example",
        role="Senior Support Agent",
        status="Online",
    ),
    Agent(
        id="agent_2",
        name="Brian Otieno",
        avatar="https://picsum.photos/seed/agent_2/200/200",
        email="brian@support.example",
        role="Support Agent",
        status="Away",
    ),
]

CANNED_RESPONSES = [
    CannedResponse(
        id="cr_1",
        label="Greeting",
        text="Hello, thank you for reaching out. How can I help you today?",
    ),
    CannedResponse(
        id="cr_2",
        label="Disbursement delay",
        text="We are sorry for the delay. Your loan disbursement is being processed and should reflect shortly.",
    ),
    CannedResponse(
        id="cr_3",
        label="CRB clearance",
        text="Once your loan is fully repaid we notify the credit bureau. Clearance can take up to 7 days to reflect.",
    ),
    CannedResponse(
        id="cr_4",
        label="Fraud escalation",
        text="We take this very seriously. Your account has been flagged and our fraud team will contact you.",
    ),
]
