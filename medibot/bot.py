"""Turn orchestration shared by the CLI and the HTTP server.

One turn is: classify the message with Wit.ai, let the dialogue manager
update the session and pick a reply, and call Gemini only when the message
falls outside the appointment flow.  Classification errors propagate so
each adapter can report them in its own way.
"""

from __future__ import annotations

import logging

from medibot.config import BOOKING_INTENT, MAX_SESSIONS, REQUIRE_TRIGGER_KEYWORD
from medibot.dialogue import DialogueManager
from medibot.services.gemini_client import GeminiClient
from medibot.services.wit_client import WitClient
from medibot.sessions import DEFAULT_SESSION_ID, SessionStore

logger = logging.getLogger(__name__)


class ChatBot:
    def __init__(
        self,
        wit: WitClient,
        gemini: GeminiClient,
        *,
        dialogue: DialogueManager | None = None,
        sessions: SessionStore | None = None,
    ):
        self.wit = wit
        self.gemini = gemini
        self.dialogue = dialogue or DialogueManager()
        self.sessions = sessions or SessionStore()

    def respond(self, message: str, session_id: str = DEFAULT_SESSION_ID) -> str:
        """Produce the reply for *message* within conversation *session_id*."""
        with self.sessions.lock(session_id) as session:
            result = self.wit.classify(message)
            reply = self.dialogue.handle(session, result, message, self.gemini.complete)
            logger.debug(
                "[%s] state=%s sessions=%d",
                session_id, self.dialogue.state_of(session).value, len(self.sessions),
            )
            return reply

    def close(self) -> None:
        self.wit.close()
        self.gemini.close()


def create_chatbot() -> ChatBot:
    """Build a ChatBot wired to the configured Wit.ai and Gemini endpoints."""
    dialogue = DialogueManager(
        booking_intent=BOOKING_INTENT,
        require_trigger_keyword=REQUIRE_TRIGGER_KEYWORD,
    )
    bot = ChatBot(
        WitClient(),
        GeminiClient(),
        dialogue=dialogue,
        sessions=SessionStore(max_sessions=MAX_SESSIONS),
    )
    logger.debug(
        "ChatBot ready — booking intent: %s, trigger keyword required: %s",
        BOOKING_INTENT, REQUIRE_TRIGGER_KEYWORD,
    )
    return bot
