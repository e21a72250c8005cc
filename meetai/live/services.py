"""
Live Business Logic - drives a CallSession through its timers.

Following patterns from AgentService for consistency with existing domain
design. All transitions happen on a single event loop; the connect delay, the
duration ticker and the meeting-link lookup are the only suspending work and
each is a cancellable asyncio task owned by the controller.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, Optional

from meetai.agents.models import Agent

from .constants import CONNECT_DELAY_SECONDS, TICK_INTERVAL_SECONDS, CallStatus
from .exceptions import MeetingLinkLookupError
from .meeting_link import resolve_meeting_link
from .models import CallSession

logger = logging.getLogger(__name__)

MeetingLinkLookup = Callable[[str], Awaitable[str]]
ChangeListener = Callable[[CallSession], None]


class LiveCallController:
    """
    Owns one CallSession and every task that may mutate it.

    Responsibilities:
    - Apply user actions (select agent, start, end, insight)
    - Schedule the connecting -> live transition
    - Keep the elapsed duration in step while live
    - Resolve the meeting link for the active agent
    - Cancel outstanding work on re-entry and on teardown
    """

    def __init__(
        self,
        agents: Iterable[Agent],
        initial_agent_id: Optional[str] = None,
        link_lookup: Optional[MeetingLinkLookup] = None,
        connect_delay: float = CONNECT_DELAY_SECONDS,
        tick_interval: float = TICK_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_change: Optional[ChangeListener] = None,
    ):
        self.session = CallSession(agents=list(agents), active_agent_id=initial_agent_id)
        self._link_lookup = link_lookup
        self._connect_delay = connect_delay
        self._tick_interval = tick_interval
        self._clock = clock
        self._on_change = on_change

        self._connect_task: Optional[asyncio.Task] = None
        self._tick_task: Optional[asyncio.Task] = None
        self._link_task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _notify(self):
        if self._on_change and not self._closed:
            self._on_change(self.session)

    @staticmethod
    def _cancel(task: Optional[asyncio.Task]):
        if task and not task.done():
            task.cancel()

    # ==================== MEETING LINK ====================

    def mount(self):
        """Kick off the first meeting-link lookup. Call from a running loop."""
        self._refresh_meeting_link()

    def _refresh_meeting_link(self):
        self._cancel(self._link_task)
        self._link_task = None

        agent = self.session.active_agent
        if agent is None or self._link_lookup is None or self._closed:
            self.session.is_fetching_meeting_link = False
            return

        self.session.is_fetching_meeting_link = True
        self._link_task = asyncio.create_task(self._lookup_meeting_link(agent))

    async def _lookup_meeting_link(self, agent: Agent):
        try:
            link = await self._link_lookup(agent.name)
        except MeetingLinkLookupError as e:
            logger.debug(f"Meeting link lookup failed for {agent.name!r}, using fallback: {e.message}")
            link = resolve_meeting_link(agent.name)
        except Exception as e:
            logger.warning(f"Unexpected meeting link lookup error for agent {agent.id}: {str(e)}", exc_info=True)
            link = resolve_meeting_link(agent.name)

        # A lookup for an agent that is no longer active never writes
        if self._closed or self.session.active_agent_id != agent.id:
            return

        self.session.apply_meeting_link(link)
        self._notify()

    # ==================== ACTIONS ====================

    def select_agent(self, agent_id: str) -> bool:
        """Switch the active agent and re-resolve its meeting link."""
        if not self.session.select_agent(agent_id):
            return False

        logger.debug(f"Active agent switched to {agent_id} (status={self.session.status.value})")
        self._refresh_meeting_link()
        self._notify()
        return True

    def start(self) -> bool:
        """Start connecting; goes live after the connect delay."""
        if not self.session.start():
            return False

        self._cancel(self._connect_task)
        self._cancel(self._tick_task)
        self._tick_task = None
        self._connect_task = asyncio.create_task(self._complete_connect())

        logger.info(f"Call connecting with agent {self.session.connecting_agent.id}")
        self._notify()
        return True

    async def _complete_connect(self):
        await asyncio.sleep(self._connect_delay)
        if not self.session.go_live(self._clock()):
            return

        logger.info(f"Call live with agent {self.session.connecting_agent.id}")
        self._tick_task = asyncio.create_task(self._run_ticker())
        self._notify()

    async def _run_ticker(self):
        while self.session.status == CallStatus.LIVE:
            await asyncio.sleep(self._tick_interval)
            if self.session.tick(self._clock()):
                self._notify()

    def end(self) -> bool:
        """Hang up the current call."""
        if not self.session.end():
            return False

        self._cancel(self._connect_task)
        self._cancel(self._tick_task)
        self._connect_task = None
        self._tick_task = None

        logger.info("Call ended")
        self._notify()
        return True

    def request_insight(self) -> bool:
        """Append the canned recap while live."""
        if not self.session.request_insight():
            return False

        self._notify()
        return True

    # ==================== TEARDOWN ====================

    async def teardown(self):
        """Cancel every outstanding task. The session is never mutated afterwards."""
        if self._closed:
            return
        self._closed = True

        tasks = [t for t in (self._connect_task, self._tick_task, self._link_task) if t]
        for task in tasks:
            self._cancel(task)
        await asyncio.gather(*tasks, return_exceptions=True)

        self._connect_task = None
        self._tick_task = None
        self._link_task = None
        logger.debug("Live call controller torn down")
