"""Course calendar integration.

Links a user's Google Calendar to the course app: upcoming course deadlines,
today's agenda, and milestone/task creation and deletion, plus a client that
keeps a UI-facing view of that data in sync.
"""

__version__ = "0.1.0"
