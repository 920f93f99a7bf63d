from src.application.boot_sequence import (
    BROWSER_LOADER,
    COMPLETE_STATUS,
    LANDING_LOADER,
    LOADER_SCRIPT_LINES,
    TERMINAL_LINES,
    BootLoader,
    TerminalFeed,
)
from src.infrastructure.page import Page
from src.infrastructure.scheduler import Scheduler

LOADER_ELEMENTS = ("loadingOverlay", "loaderProgress", "loaderLog", "loaderStatus")


class FixedStep:
    """Stands in for random.Random with a constant step."""

    def __init__(self, step):
        self.step = step
        self.calls = []

    def randint(self, low, high):
        self.calls.append((low, high))
        return self.step


def test_progress_caps_at_100_and_overlay_hides_after_delay():
    page = Page.with_elements(LOADER_ELEMENTS)
    scheduler = Scheduler()
    finished = []
    loader = BootLoader(page, scheduler, LANDING_LOADER, rng=FixedStep(30), on_finished=lambda: finished.append(1))

    loader.start()
    scheduler.advance(600)
    assert page.element("loaderProgress").text == "90%"

    scheduler.advance(200)
    assert page.element("loaderProgress").text == "100%"
    assert loader.progress == 120
    assert not page.element("loadingOverlay").has_class("hidden")

    scheduler.advance(350)
    assert page.element("loadingOverlay").has_class("hidden")
    assert finished == [1]
    assert scheduler.pending == 0


def test_landing_loader_uses_its_step_range():
    rng = FixedStep(50)
    loader = BootLoader(Page.with_elements(LOADER_ELEMENTS), Scheduler(), LANDING_LOADER, rng=rng)

    loader.start()
    loader.scheduler.advance(200)

    assert rng.calls == [(5, 19)]


def test_log_keeps_last_six_lines_and_timeout_forces_completion():
    page = Page.with_elements(LOADER_ELEMENTS)
    scheduler = Scheduler()
    finished = []
    loader = BootLoader(page, scheduler, LANDING_LOADER, rng=FixedStep(1), on_finished=lambda: finished.append(1))

    loader.start()
    scheduler.advance(1600)

    assert loader.log_lines == LOADER_SCRIPT_LINES[2:]
    assert page.element("loaderLog").html.count("loader-log-line") == 6
    assert page.element("loaderStatus").text == LOADER_SCRIPT_LINES[-1]

    scheduler.advance(5400)

    assert page.element("loaderProgress").text == "100%"
    assert page.element("loadingOverlay").has_class("hidden")
    assert page.element("loaderStatus").text == COMPLETE_STATUS
    assert finished == [1]
    assert scheduler.pending == 0


def test_missing_loader_elements_finish_immediately():
    page = Page.with_elements(["loaderLog"])
    scheduler = Scheduler()
    finished = []
    loader = BootLoader(page, scheduler, LANDING_LOADER, on_finished=lambda: finished.append(1))

    loader.start()

    assert finished == [1]
    assert scheduler.pending == 0


def test_browser_loader_has_no_timeout_or_log():
    page = Page.with_elements(("loadingOverlay", "loaderProgress"))
    scheduler = Scheduler()
    loader = BootLoader(page, scheduler, BROWSER_LOADER, rng=FixedStep(25))

    loader.start()
    scheduler.advance(4 * 180)
    assert scheduler.pending == 1
    scheduler.advance(400)

    assert page.element("loadingOverlay").has_class("hidden")
    assert loader.log_lines == ()
    assert scheduler.pending == 0


def test_stop_cancels_loader_timers():
    scheduler = Scheduler()
    loader = BootLoader(Page.with_elements(LOADER_ELEMENTS), scheduler, LANDING_LOADER, rng=FixedStep(1))

    loader.start()
    loader.stop()

    assert scheduler.pending == 0


def test_terminal_feed_shows_every_line_once():
    page = Page.with_elements(["terminalFeed"])
    scheduler = Scheduler()
    feed = TerminalFeed(page, scheduler)

    feed.start()
    feed.start()
    scheduler.advance(800 * len(TERMINAL_LINES) + 5000)

    markup = page.element("terminalFeed").html
    assert feed.shown == len(TERMINAL_LINES)
    assert markup.count("<div>&gt; ") == len(TERMINAL_LINES)
    assert "boot sequence &gt; secure_labs.sh" in markup
    assert scheduler.pending == 0


def test_terminal_feed_without_element_stops():
    scheduler = Scheduler()
    feed = TerminalFeed(Page(), scheduler)

    feed.start()
    scheduler.advance(800)

    assert feed.shown == 0
    assert scheduler.pending == 0
