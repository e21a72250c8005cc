"""Live Domain Constants - call lifecycle states and canned transcript copy."""

from enum import Enum

# Meeting links
MEETING_LINK_BASE_URL = "https://stream.meet.ai"
FALLBACK_AGENT_SLUG = "agent"
MEETING_LINK_PATH = "/api/live/meeting-link"
MEETING_LINK_TIMEOUT = 5.0  # seconds

# Timing
CONNECT_DELAY_SECONDS = 0.8
TICK_INTERVAL_SECONDS = 1.0

# View copy
SHORT_INSTRUCTIONS_LIMIT = 140
DEFAULT_SHORT_INSTRUCTIONS = "OpenAI agent ready for live calls."

# WebSocket
SOCKET_RECEIVE_TIMEOUT = 1  # seconds


class CallStatus(str, Enum):
    """Simulated call lifecycle states."""

    IDLE = "idle"
    CONNECTING = "connecting"
    LIVE = "live"


class TranscriptTone(str, Enum):
    """Who a transcript line is attributed to."""

    AGENT = "agent"
    USER = "user"
    SYSTEM = "system"


class ClientAction(str, Enum):
    """Actions a client may send over the live-call socket."""

    SELECT_AGENT = "select_agent"
    START = "start"
    END = "end"
    INSIGHT = "insight"
    CLOSE = "close"


# Speakers
SYSTEM_SPEAKER = "System"
USER_SPEAKER = "You"

# Transcript copy ({name} = agent name, {link} = meeting link)
GREETING_LINE = "Pair your agent to join a live video call and begin transcribing."
JOINING_LINE = "{name} is joining with OpenAI-powered voice + video on Stream."
AGENT_READY_LINE = (
    "I'm live on camera and ready to assist. What would you like me to capture?"
)
BRIDGE_READY_LINE = (
    "Stream video bridge ready at {link}. "
    "Captions and speaker tags are enabled for this session."
)
NOW_LIVE_LINE = (
    "{name} is now live on video. "
    "Audio, captions, and action items will stream automatically."
)
ENDED_LINE = (
    "{name} ended the live video session. A recap will be queued automatically."
)
INSIGHT_PROMPT_LINE = "Give me a concise status and next actions for this call."
INSIGHT_RECAP_LINE = (
    "Based on the live transcript, here are the next steps: summarize decisions, "
    "assign owners, and send a recap that matches the {name} playbook."
)
INSIGHT_DELIVERED_LINE = (
    "Live summary delivered. "
    "The video agent will keep tracking follow-ups in real time."
)

# Message type constants
MESSAGE_TYPE_STATE = "state"
MESSAGE_TYPE_ERROR = "error"
MESSAGE_TYPE_PING = "ping"
MESSAGE_TYPE_PONG = "pong"
