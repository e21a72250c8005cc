"""
Live Domain Models - simulated call session state.

Following patterns from agents/models.py for consistency. The transitions here
are pure: they take the current time as an argument and never schedule
anything, so LiveCallController owns every timer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from meetai.agents.models import Agent

from .constants import (
    AGENT_READY_LINE,
    BRIDGE_READY_LINE,
    DEFAULT_SHORT_INSTRUCTIONS,
    ENDED_LINE,
    GREETING_LINE,
    INSIGHT_DELIVERED_LINE,
    INSIGHT_PROMPT_LINE,
    INSIGHT_RECAP_LINE,
    JOINING_LINE,
    NOW_LIVE_LINE,
    SHORT_INSTRUCTIONS_LIMIT,
    SYSTEM_SPEAKER,
    USER_SPEAKER,
    CallStatus,
    TranscriptTone,
)
from .meeting_link import resolve_meeting_link


@dataclass(frozen=True)
class TranscriptLine:
    """Represents a single line of the fabricated call transcript."""
    speaker: str
    content: str
    tone: TranscriptTone

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "speaker": self.speaker,
            "content": self.content,
            "tone": self.tone.value,
        }


def _greeting() -> List[TranscriptLine]:
    return [TranscriptLine(SYSTEM_SPEAKER, GREETING_LINE, TranscriptTone.SYSTEM)]


@dataclass
class CallSession:
    """
    One visit to the live-calls view.

    Lifecycle:
    1. Created when the view mounts (status=IDLE, one greeting line)
    2. start() -> CONNECTING, three lines appended
    3. go_live() after the connect delay -> LIVE, one line appended
    4. tick() keeps elapsed_seconds in step with the live start timestamp
    5. end() -> IDLE, one line appended
    The transcript only ever grows.
    """
    agents: List[Agent] = field(default_factory=list)
    active_agent_id: Optional[str] = None
    status: CallStatus = CallStatus.IDLE
    elapsed_seconds: int = 0
    transcript: List[TranscriptLine] = field(default_factory=_greeting)
    meeting_link: str = ""
    is_fetching_meeting_link: bool = False

    # Monotonic timestamp captured when LIVE was entered
    live_started_at: Optional[float] = None
    # Agent that the pending connect will announce
    connecting_agent: Optional[Agent] = None

    def __post_init__(self):
        if self.active_agent_id not in {agent.id for agent in self.agents}:
            self.active_agent_id = self.agents[0].id if self.agents else None
        if not self.meeting_link:
            self.meeting_link = self.fallback_meeting_link

    # ==================== DERIVED STATE ====================

    @property
    def active_agent(self) -> Optional[Agent]:
        for agent in self.agents:
            if agent.id == self.active_agent_id:
                return agent
        return self.agents[0] if self.agents else None

    @property
    def fallback_meeting_link(self) -> str:
        agent = self.active_agent
        return resolve_meeting_link(agent.name if agent else None)

    @property
    def is_live(self) -> bool:
        return self.status == CallStatus.LIVE

    @property
    def formatted_duration(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def short_instructions(self) -> str:
        agent = self.active_agent
        if not agent or not agent.instructions:
            return DEFAULT_SHORT_INSTRUCTIONS
        if len(agent.instructions) < SHORT_INSTRUCTIONS_LIMIT:
            return agent.instructions
        return f"{agent.instructions[:SHORT_INSTRUCTIONS_LIMIT - 3]}..."

    # ==================== TRANSITIONS ====================

    def _append(self, speaker: str, content: str, tone: TranscriptTone):
        self.transcript.append(TranscriptLine(speaker, content, tone))

    def select_agent(self, agent_id: str) -> bool:
        """
        Make another loaded agent active.

        Status and transcript are left alone. Returns True when the active
        agent changed (the caller should refresh the meeting link).
        """
        if agent_id == self.active_agent_id:
            return False
        if agent_id not in {agent.id for agent in self.agents}:
            return False

        self.active_agent_id = agent_id
        self.meeting_link = self.fallback_meeting_link
        return True

    def start(self) -> bool:
        """Begin connecting the active agent. No-op while live or agentless."""
        agent = self.active_agent
        if agent is None or self.status == CallStatus.LIVE:
            return False

        self.elapsed_seconds = 0
        self.live_started_at = None
        self.status = CallStatus.CONNECTING
        self.connecting_agent = agent
        self._append(SYSTEM_SPEAKER, JOINING_LINE.format(name=agent.name), TranscriptTone.SYSTEM)
        self._append(agent.name, AGENT_READY_LINE, TranscriptTone.AGENT)
        self._append(
            SYSTEM_SPEAKER,
            BRIDGE_READY_LINE.format(link=self.meeting_link),
            TranscriptTone.SYSTEM,
        )
        return True

    def go_live(self, now: float) -> bool:
        """Finish connecting. Only valid from CONNECTING."""
        if self.status != CallStatus.CONNECTING:
            return False

        agent = self.connecting_agent or self.active_agent
        self.status = CallStatus.LIVE
        self.elapsed_seconds = 0
        self.live_started_at = now
        self._append(SYSTEM_SPEAKER, NOW_LIVE_LINE.format(name=agent.name), TranscriptTone.SYSTEM)
        return True

    def tick(self, now: float) -> bool:
        """
        Recompute elapsed_seconds from the live start timestamp.

        Returns True when the displayed duration changed.
        """
        if self.status != CallStatus.LIVE or self.live_started_at is None:
            return False

        elapsed = max(0, int(now - self.live_started_at))
        if elapsed == self.elapsed_seconds:
            return False
        self.elapsed_seconds = elapsed
        return True

    def end(self) -> bool:
        """Hang up. No-op while idle."""
        if self.status == CallStatus.IDLE:
            return False

        agent = self.active_agent or self.connecting_agent
        self.status = CallStatus.IDLE
        self.elapsed_seconds = 0
        self.live_started_at = None
        self.connecting_agent = None
        self._append(SYSTEM_SPEAKER, ENDED_LINE.format(name=agent.name), TranscriptTone.SYSTEM)
        return True

    def request_insight(self) -> bool:
        """Append a canned status recap. Only while live with an agent."""
        agent = self.active_agent
        if agent is None or self.status != CallStatus.LIVE:
            return False

        self._append(USER_SPEAKER, INSIGHT_PROMPT_LINE, TranscriptTone.USER)
        self._append(agent.name, INSIGHT_RECAP_LINE.format(name=agent.name), TranscriptTone.AGENT)
        self._append(SYSTEM_SPEAKER, INSIGHT_DELIVERED_LINE, TranscriptTone.SYSTEM)
        return True

    def apply_meeting_link(self, link: str):
        """Record the resolved meeting link and clear the fetching flag."""
        self.meeting_link = link
        self.is_fetching_meeting_link = False

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary for JSON serialization."""
        agent = self.active_agent
        return {
            "status": self.status.value,
            "is_live": self.is_live,
            "active_agent": agent.model_dump(mode="json") if agent else None,
            "agents": [{"id": a.id, "name": a.name} for a in self.agents],
            "elapsed_seconds": self.elapsed_seconds,
            "formatted_duration": self.formatted_duration,
            "short_instructions": self.short_instructions,
            "meeting_link": self.meeting_link,
            "is_fetching_meeting_link": self.is_fetching_meeting_link,
            "transcript": [line.to_dict() for line in self.transcript],
        }
