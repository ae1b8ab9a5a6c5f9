"""MediBot — a small Turkish hospital appointment assistant.

Architecture Overview
=====================

Every user message goes through the same turn:

1. **Wit.ai** classifies the text (intent + confidence + entities).
2. The **dialogue manager** merges entities into the conversation's
   session and, when the appointment flow is active, asks for the next
   missing slot (hospital, department, date/time) or for confirmation.
3. Anything outside the flow is answered by **Gemini**, primed with a
   short hint describing what Wit.ai understood.

Package Structure
-----------------
- ``medibot/dialogue.py`` — session model and slot-filling state machine
- ``medibot/sessions.py`` — per-conversation session store
- ``medibot/bot.py`` — turn orchestration shared by both interfaces
- ``medibot/nlu.py`` — Wit.ai response models
- ``medibot/prompts.py`` — user-facing replies and the Gemini hint
- ``medibot/config.py`` — configuration from environment variables
- ``medibot/services/`` — Wit.ai and Gemini HTTP clients
- ``medibot/main.py`` — CLI chat loop
- ``medibot/server.py`` / ``medibot/api/`` — FastAPI application
"""
