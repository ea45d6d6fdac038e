import logging
import sys
from pathlib import Path
from typing import NamedTuple

from models import Message
from triage import calculate_urgency

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'


class ParseReport(NamedTuple):
    messages: list[Message]
    dropped: int


def split_record(line: str) -> list[str]:
    """
    Splits one raw line into fields. A quote toggles the "inside quotes"
    state and is not kept; delimiters inside quotes are literal text.
    """
    parts = []
    current = ""
    in_quote = False

    for char in line:
        if char == QUOTE:
            in_quote = not in_quote
        elif char == DELIMITER and not in_quote:
            parts.append(current)
            current = ""
        else:
            current += char
    parts.append(current)
    return parts


def _strip_wrapping_quotes(text: str) -> str:
    if len(text) >= 2 and text.startswith(QUOTE) and text.endswith(QUOTE):
        return text[1:-1]
    return text


def parse_batch(raw_text: str) -> ParseReport:
    lines = raw_text.strip().replace("\r\n", "\n").split("\n")
    messages = []
    dropped = 0

    # Skip header (index 0)
    for i, line in enumerate(lines[1:], start=1):
        parts = split_record(line)
        if len(parts) < 3:
            dropped += 1
            continue

        # Unquoted delimiters in the body split it; put them back
        body = _strip_wrapping_quotes(DELIMITER.join(parts[2:]).strip())
        messages.append(Message(
            id=f"msg_{i}",
            user_id=parts[0].strip(),
            timestamp=parts[1].strip(),
            body=body,
            direction="inbound",
            urgency_score=calculate_urgency(body),
            is_read=False,
            status="open",
        ))

    if dropped:
        logger.info("Dropped %d malformed line(s) during ingestion", dropped)

    # Initial order: most urgent first, stable on line order
    messages.sort(key=lambda m: m.urgency_score, reverse=True)
    return ParseReport(messages, dropped)


def parse_csv(raw_text: str) -> list[Message]:
    return parse_batch(raw_text).messages


def load_batch(path) -> ParseReport:
    text = Path(path).read_text(encoding="utf-8")
    report = parse_batch(text)
    logger.info("Loaded %d message(s) from %s", len(report.messages), path)
    return report


if __name__ == "__main__":
    source = sys.argv[1] if len(sys.argv) > 1 else "data/messages.csv"
    report = load_batch(source)
    print(f"Parsed {len(report.messages)} messages from {source} ({report.dropped} dropped)")
