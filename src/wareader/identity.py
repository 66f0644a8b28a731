"""Resolve placeholder and self senders after a chat has been parsed.

Exports made from a one-to-one chat often hide the other party behind an
invisible-character sender, or label the owner as "You". The rules below
are heuristics keyed on the participant count and the export's title, and
are applied in order; the first that matches wins:

1. {placeholder, self label}: placeholder -> title name.
2. {placeholder}: placeholder -> title name.
3. Two named senders, one equal to the title: the other becomes self.
4. Two senders otherwise: named sender is the counterpart, the rest self.
5. Leftover placeholders (group chats) -> self label. Flagged as ambiguous.
"""

from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, ParserConfig
from .models import IdentityResolution, Message

logger = logging.getLogger(__name__)

# sender -> (new sender, is_self)
Assignment = dict[str, tuple[str, bool]]


def _apply(messages: list[Message], assignment: Assignment) -> list[Message]:
    resolved: list[Message] = []
    for msg in messages:
        if msg.sender in assignment:
            sender, is_self = assignment[msg.sender]
            if sender != msg.sender or is_self != msg.is_self:
                msg = msg.model_copy(update={"sender": sender, "is_self": is_self})
        resolved.append(msg)
    return resolved


def _dedupe(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


def resolve_identities(
    messages: list[Message],
    participants: list[str],
    title: str,
    config: ParserConfig | None = None,
) -> IdentityResolution:
    """Rewrite senders and self flags, returning new messages and participants.

    `participants` are the distinct senders without the system sender, and
    `title` is the cleaned export name (see parser.derive_title).
    """
    config = config or DEFAULT_CONFIG
    hidden = config.placeholder_sender
    you = config.self_label
    other_party = title or config.untitled

    final = list(participants)
    has_hidden = hidden in participants
    has_you = you in participants

    if len(participants) == 2 and has_hidden and has_you:
        messages = _apply(messages, {hidden: (other_party, False), you: (you, True)})
        final = [other_party if p == hidden else p for p in final]
    elif len(participants) == 1 and has_hidden:
        messages = _apply(messages, {hidden: (other_party, False)})
        final = [other_party]
    elif len(participants) == 2:
        counterpart = next(
            (p for p in participants if p.lower() == other_party.lower()), None
        )
        others = [p for p in participants if p.lower() != other_party.lower()]

        if not has_hidden and counterpart and others:
            messages = _apply(
                messages, {counterpart: (counterpart, False), others[0]: (you, True)}
            )
            final = [counterpart, you]
        elif any(p not in (you, hidden) for p in participants):
            assignment = {
                p: (p, p in (you, hidden)) for p in participants
            }
            messages = _apply(messages, assignment)

    leftover = sum(1 for m in messages if m.sender == hidden)
    if leftover:
        logger.warning(
            "Could not resolve %d message(s) from an anonymized sender, "
            "attributing them to %r",
            leftover,
            you,
        )
        messages = _apply(messages, {hidden: (you, True)})

    final = _dedupe([you if p == hidden else p for p in final])

    return IdentityResolution(
        messages=messages, participants=final, ambiguous=bool(leftover)
    )
