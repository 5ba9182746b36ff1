"""
RFQ email content and a logging mail sink.

Nothing here sends mail. MailLog records what would have been sent and is
passed in by the caller, so every run owns its own log.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from .models import IndentLine

logger = logging.getLogger(__name__)


@dataclass
class RFQ:
    """Request for quotation header."""
    rfq_number: str
    title: str
    due_date: Optional[date] = None


@dataclass
class RFQEmail:
    subject: str
    body: str


@dataclass
class LoggedEmail:
    """An email recorded by MailLog instead of being delivered."""
    id: str
    to: str
    subject: str
    body: str
    attachments: List[str] = field(default_factory=list)
    status: str = "LOGGED"
    timestamp: str = ""


def _format_quantity(line: IndentLine) -> str:
    return f"{line.quantity.normalize():f} {line.unit}"


def generate_rfq_email(rfq: RFQ, vendor_name: str, indent_lines: Sequence[IndentLine]) -> RFQEmail:
    """Compose the RFQ email asking a vendor to quote the indent's lines."""
    subject = f"RFQ {rfq.rfq_number}: {rfq.title}"

    items = "\n".join(
        f"{index}. {line.raw_description} - Qty: {_format_quantity(line)}"
        for index, line in enumerate(indent_lines, start=1)
    )
    due_date = f"Due Date: {rfq.due_date.isoformat()}" if rfq.due_date else ""

    body = f"""Dear {vendor_name},

We are pleased to send you the following Request for Quotation.

RFQ Number: {rfq.rfq_number}
Title: {rfq.title}
{due_date}

Items Required:
{items}

Please provide your best quote with the following details:
- Unit Price
- GST %
- Freight charges (if any)
- Lead time
- Payment terms
- Brand/Make

Kindly respond at the earliest.

Best regards,
Purchase Team"""

    return RFQEmail(subject=subject, body=body)


class MailLog:
    """Collects outgoing emails and logs them rather than sending."""

    def __init__(self):
        self.entries: List[LoggedEmail] = []

    def send(self, to: str, subject: str, body: str, attachments: Sequence[str] = ()) -> LoggedEmail:
        entry = LoggedEmail(
            id=f"email_{uuid.uuid4().hex[:12]}",
            to=to,
            subject=subject,
            body=body,
            attachments=list(attachments),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(f"Logged email to {to}: {subject}")
        logger.debug(f"Email body:\n{body}")
        self.entries.append(entry)
        return entry
