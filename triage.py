BASE_SCORE = 10
MAX_SCORE = 100

# Keyword-based scoring: (triggers, weight). Any trigger in a group adds the
# weight once, however many times it appears.
URGENCY_TRIGGERS = [
    (("reject",), 50),
    (("disburs",), 40),
    (("money",), 30),
    (("urgent",), 30),
    (("wait",), 20),
    (("clear",), 20),   # clearance
    (("crb",), 40),     # credit reference bureau
    (("fraud", "used my i.d"), 80),
]

# Badge thresholds shown next to inbound messages
URGENCY_LABELS = [
    (70, "Critical"),
    (40, "High"),
    (0, "Normal"),
]


def calculate_urgency(text: str) -> int:
    score = BASE_SCORE
    text = (text or "").lower()

    for triggers, weight in URGENCY_TRIGGERS:
        if any(t in text for t in triggers):
            score += weight

    return min(MAX_SCORE, score)


def urgency_label(score: int) -> str:
    for threshold, label in URGENCY_LABELS:
        if score >= threshold:
            return label
    return URGENCY_LABELS[-1][1]
