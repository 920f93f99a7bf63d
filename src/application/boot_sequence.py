"""Timer-driven boot loader and terminal feed shown while a page settles."""

import html
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from src.infrastructure.page import Page
from src.infrastructure.scheduler import Scheduler, Timer

logger = logging.getLogger(__name__)

LOADER_SCRIPT_LINES = (
    "[ INIT ] mounting /dev/xbox360-wireless",
    "[ INFO ] loading reverse_engineering toolchain",
    "[ INFO ] linking ESP32 controller interface",
    "[ INFO ] scanning self-hosted services (n8n, jellyfin, lab)",
    "[ WARN ] external telemetry: disabled",
    "[ OK ]  local lab integrity verified",
    "[ EXEC ] starting SaifDemos interactive shell",
    "[ GRANT ] access level: root",
)

TERMINAL_LINES = (
    "boot sequence > secure_labs.sh",
    "loading modules [javafx, cpp, asm, js]",
    "establishing encrypted link...",
    "deploying xbox360_protocol_mapper",
    "self-hosted stack: jellyfin + n8n + monitoring",
    "status >> green · awaiting next mission",
)

COMPLETE_STATUS = "[ COMPLETE ] access granted · loading UI"
HIDDEN_CLASS = "hidden"
MAX_LOG_LINES = 6


@dataclass(frozen=True)
class LoaderProfile:
    """Timing and content of one page's loader."""

    tick_ms: int
    min_step: int
    max_step: int
    hide_delay_ms: int
    timeout_ms: Optional[int] = None
    script_lines: Tuple[str, ...] = ()


LANDING_LOADER = LoaderProfile(
    tick_ms=200,
    min_step=5,
    max_step=19,
    hide_delay_ms=350,
    timeout_ms=7000,
    script_lines=LOADER_SCRIPT_LINES,
)

BROWSER_LOADER = LoaderProfile(tick_ms=180, min_step=4, max_step=15, hide_delay_ms=400)


class BootLoader:
    """
    Simulated loading overlay.

    Progress grows by a random step on every tick until it reaches 100, at
    which point the tick timer stops and the overlay is hidden after a short
    delay. An optional overall timeout forces completion.
    """

    def __init__(
        self,
        page: Page,
        scheduler: Scheduler,
        profile: LoaderProfile,
        rng: Optional[random.Random] = None,
        on_finished: Optional[Callable[[], None]] = None,
    ):
        self.page = page
        self.scheduler = scheduler
        self.profile = profile
        self.rng = rng or random.Random()
        self.on_finished = on_finished
        self.progress = 0
        self.finished = False
        self._script_index = 0
        self._log = deque(maxlen=MAX_LOG_LINES)
        self._tick_timer: Optional[Timer] = None
        self._hide_timer: Optional[Timer] = None
        self._timeout_timer: Optional[Timer] = None

    @property
    def log_lines(self) -> Tuple[str, ...]:
        return tuple(self._log)

    def start(self):
        """Begin ticking; without an overlay or progress element the loader finishes at once."""
        if self.page.element("loadingOverlay") is None or self.page.element("loaderProgress") is None:
            logger.debug("Loader elements missing, skipping boot animation")
            self._complete()
            return

        self._tick_timer = self.scheduler.every(self.profile.tick_ms, self._tick)
        if self.profile.timeout_ms is not None:
            self._timeout_timer = self.scheduler.after(self.profile.timeout_ms, self._expire)

    def stop(self):
        for timer in (self._tick_timer, self._hide_timer, self._timeout_timer):
            self.scheduler.cancel(timer)
        self._tick_timer = self._hide_timer = self._timeout_timer = None

    def _push_log_line(self, text: str):
        log = self.page.element("loaderLog")
        if log is None:
            return
        self._log.append(text)
        log.html = "".join(
            f'<div class="loader-log-line">&gt; {html.escape(line)}</div>' for line in self._log
        )

    def _tick(self):
        self.progress += self.rng.randint(self.profile.min_step, self.profile.max_step)
        self.page.element("loaderProgress").text = f"{min(self.progress, 100)}%"

        if self._script_index < len(self.profile.script_lines):
            line = self.profile.script_lines[self._script_index]
            self._script_index += 1
            self._push_log_line(line)
            status = self.page.element("loaderStatus")
            if status is not None:
                status.text = line

        if self.progress >= 100:
            self.scheduler.cancel(self._tick_timer)
            self._tick_timer = None
            self._hide_timer = self.scheduler.after(self.profile.hide_delay_ms, self._hide)

    def _hide(self):
        self._hide_timer = None
        self.page.element("loadingOverlay").add_class(HIDDEN_CLASS)
        self._complete()

    def _expire(self):
        self._timeout_timer = None
        if self.page.element("loadingOverlay").has_class(HIDDEN_CLASS):
            return
        logger.debug(f"Loader timed out at {self.progress}%")
        self.scheduler.cancel(self._tick_timer)
        self.scheduler.cancel(self._hide_timer)
        self._tick_timer = self._hide_timer = None
        self.page.element("loaderProgress").text = "100%"
        self.page.element("loadingOverlay").add_class(HIDDEN_CLASS)
        status = self.page.element("loaderStatus")
        if status is not None:
            status.text = COMPLETE_STATUS
        self._complete()

    def _complete(self):
        if self.finished:
            return
        self.finished = True
        self.scheduler.cancel(self._timeout_timer)
        self._timeout_timer = None
        if self.on_finished is not None:
            self.on_finished()


class TerminalFeed:
    """Appends one terminal line per interval until every line is shown. Starts at most once."""

    def __init__(
        self,
        page: Page,
        scheduler: Scheduler,
        lines: Tuple[str, ...] = TERMINAL_LINES,
        interval_ms: int = 800,
    ):
        self.page = page
        self.scheduler = scheduler
        self.lines = lines
        self.interval_ms = interval_ms
        self.started = False
        self.shown = 0
        self._timer: Optional[Timer] = None

    def start(self):
        if self.started:
            return
        self.started = True
        if self.lines:
            self._timer = self.scheduler.every(self.interval_ms, self._tick)

    def stop(self):
        self.scheduler.cancel(self._timer)
        self._timer = None

    def _tick(self):
        feed = self.page.element("terminalFeed")
        if feed is None:
            self.stop()
            return
        feed.html += f"\n      <div>&gt; {html.escape(self.lines[self.shown])}</div>"
        self.shown += 1
        if self.shown == len(self.lines):
            self.stop()
