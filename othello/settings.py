from __future__ import annotations
import os
import shlex

REDIS_URL = os.getenv("REDIS_URL")
MAX_LOG_ENTRIES = int(os.getenv("MAX_LOG_ENTRIES", "500"))

# External move provider: a local executable (`<cmd> <board> <turn>`) or an HTTP endpoint
AI_COMMAND = shlex.split(os.getenv("OTHELLO_AI_COMMAND", ""))
AI_URL = os.getenv("OTHELLO_AI_URL")
AI_TIMEOUT = float(os.getenv("OTHELLO_AI_TIMEOUT", "0")) or None
AI_USER_AGENT = os.getenv("AI_USER_AGENT", "OthelloSessions/0.1")

DEFAULT_POLICY = os.getenv("OTHELLO_DEFAULT_POLICY", "fixed_roles")
PROVIDER_PLAYER = os.getenv("OTHELLO_PROVIDER_PLAYER", "white")
