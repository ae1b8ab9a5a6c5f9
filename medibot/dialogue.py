"""Slot-filling dialogue manager for the appointment booking flow.

The flow collects three slots in a fixed order and then asks for
confirmation::

    AWAITING_FACILITY → AWAITING_DEPARTMENT → AWAITING_DATETIME
        → AWAITING_CONFIRMATION → (booked | cancelled) → IDLE

Cancelling or confirming clears the session so it can be reused for the
next booking.  A non-affirmative reply at the confirmation step simply
repeats the confirmation.  Messages outside the flow are handed to the
generative fallback together with a short context hint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable

from medibot import prompts
from medibot.nlu import ClassifierResult

logger = logging.getLogger(__name__)

ENTRY_CONFIDENCE_THRESHOLD = 0.7

Fallback = Callable[[str, str], str]


class DialogueState(str, Enum):
    IDLE = "idle"
    AWAITING_FACILITY = "awaiting_facility"
    AWAITING_DEPARTMENT = "awaiting_department"
    AWAITING_DATETIME = "awaiting_datetime"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


@dataclass
class Session:
    """Slots collected so far for one conversation."""

    facility: str | None = None
    department: str | None = None
    datetime: str | None = None

    def clear(self) -> None:
        self.facility = None
        self.department = None
        self.datetime = None

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def has_any_slot(self) -> bool:
        return not self.is_empty()

    def missing_slot(self) -> str | None:
        """Name of the first empty slot in asking order, or ``None``."""
        for f in fields(self):
            if not getattr(self, f.name):
                return f.name
        return None


@dataclass(frozen=True)
class SlotAliases:
    """Entity keys tried in order for each slot; first non-empty value wins.

    The classifier has used both ``<entity>:<role>`` and bare ``<entity>``
    keys, and both ``wit$`` and ``wit/`` prefixes for built-in entities.
    """

    facility: tuple[str, ...] = ("hastane:hastane", "hastane")
    department: tuple[str, ...] = ("bolum:bolum", "bolum")
    datetime: tuple[str, ...] = (
        "wit$datetime:datetime",
        "wit$datetime",
        "wit/datetime:datetime",
        "wit/datetime",
    )


@dataclass(frozen=True)
class Keywords:
    """Substrings matched against the lower-cased user message."""

    cancel: tuple[str, ...] = ("iptal", "cancel")
    trigger: tuple[str, ...] = ("randevu",)
    affirm: tuple[str, ...] = ("evet",)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


class DialogueManager:
    """Decides the reply for one turn and updates the session in place."""

    _QUESTIONS = {
        "facility": prompts.ASK_FACILITY,
        "department": prompts.ASK_DEPARTMENT,
        "datetime": prompts.ASK_DATETIME,
    }

    _WAITING_STATES = {
        "facility": DialogueState.AWAITING_FACILITY,
        "department": DialogueState.AWAITING_DEPARTMENT,
        "datetime": DialogueState.AWAITING_DATETIME,
    }

    def __init__(
        self,
        *,
        keywords: Keywords | None = None,
        aliases: SlotAliases | None = None,
        booking_intent: str = "randevu_al",
        require_trigger_keyword: bool = True,
    ):
        self.keywords = keywords or Keywords()
        self.aliases = aliases or SlotAliases()
        self.booking_intent = booking_intent
        self.require_trigger_keyword = require_trigger_keyword

    # ── Public API ───────────────────────────────────────────────────

    def handle(
        self,
        session: Session,
        result: ClassifierResult,
        text: str,
        fallback: Fallback,
    ) -> str:
        """Process one user turn and return the reply.

        *fallback* is called as ``fallback(text, hint)`` only when the
        message is outside the appointment flow.
        """
        lowered = text.lower()
        self.merge_entities(session, result)

        if _contains_any(lowered, self.keywords.cancel):
            logger.debug("Cancellation keyword found, clearing session")
            session.clear()
            return prompts.CANCELLED_REPLY

        if self.should_enter_flow(session, result, lowered):
            return self._continue_flow(session, lowered)

        hint = prompts.build_fallback_hint(
            text,
            result.top_intent_name,
            result.top_intent_confidence,
            self.booking_intent,
        )
        logger.debug("Outside appointment flow, deferring to fallback")
        return fallback(text, hint)

    def merge_entities(self, session: Session, result: ClassifierResult) -> None:
        """Fill empty slots from the classifier entities (first write wins)."""
        for slot in ("facility", "department", "datetime"):
            if getattr(session, slot):
                continue
            for key in getattr(self.aliases, slot):
                value = result.first_value(key)
                if value:
                    logger.debug("Slot %s filled from %r: %s", slot, key, value)
                    setattr(session, slot, value)
                    break

    def should_enter_flow(
        self, session: Session, result: ClassifierResult, lowered: str,
    ) -> bool:
        if session.has_any_slot():
            return True
        has_trigger = _contains_any(lowered, self.keywords.trigger)
        return (
            (has_trigger or not self.require_trigger_keyword)
            and result.top_intent_name == self.booking_intent
            and result.top_intent_confidence > ENTRY_CONFIDENCE_THRESHOLD
        )

    def state_of(self, session: Session) -> DialogueState:
        if session.is_empty():
            return DialogueState.IDLE
        missing = session.missing_slot()
        if missing is None:
            return DialogueState.AWAITING_CONFIRMATION
        return self._WAITING_STATES[missing]

    # ── Internal ─────────────────────────────────────────────────────

    def _continue_flow(self, session: Session, lowered: str) -> str:
        missing = session.missing_slot()
        if missing is not None:
            logger.debug("Asking for slot: %s", missing)
            return self._QUESTIONS[missing]

        confirmation = prompts.confirmation_message(
            session.facility, session.department, session.datetime,
        )
        if not _contains_any(lowered, self.keywords.affirm):
            return confirmation

        logger.info(
            "Appointment confirmed: %s / %s / %s",
            session.facility, session.department, session.datetime,
        )
        session.clear()
        return prompts.BOOKED_REPLY
