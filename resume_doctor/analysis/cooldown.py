import threading
from collections.abc import Callable

from resume_doctor.logging.logger import Log


class CooldownTimer:
    """Post-success countdown shared by one session.

    At most one countdown exists at a time: start() cancels the previous
    one before arming the new one. With ``run_in_background=False`` no
    thread is started and the countdown only advances through tick().
    """

    def __init__(
        self,
        *,
        interval_seconds: float = 1.0,
        run_in_background: bool = True,
        on_tick: Callable[[int], None] | None = None,
        on_expire: Callable[[], None] | None = None,
    ) -> None:
        self._interval_seconds = interval_seconds
        self._run_in_background = run_in_background
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._lock = threading.Lock()
        self._remaining = 0
        self._generation = 0
        self._stop_event: threading.Event | None = None

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def active(self) -> bool:
        return self._remaining > 0

    def set_callbacks(
        self,
        *,
        on_tick: Callable[[int], None] | None = None,
        on_expire: Callable[[], None] | None = None,
    ) -> None:
        self._on_tick = on_tick
        self._on_expire = on_expire

    def start(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError(f"Cooldown seconds must be non-negative, got {seconds}")
        with self._lock:
            self._stop_current()
            self._generation += 1
            self._remaining = seconds
            generation = self._generation
            stop_event = threading.Event()
            self._stop_event = stop_event
        Log.debug(f"Cooldown started: {seconds}s")
        if seconds == 0:
            self._expire()
            return
        if self._run_in_background:
            threading.Thread(
                target=self._run,
                args=(generation, stop_event),
                name="cooldown",
                daemon=True,
            ).start()

    def tick(self) -> int:
        """Advance the current countdown by one step and return what is left."""
        remaining = self._tick(self._generation)
        return self._remaining if remaining is None else remaining

    def cancel(self) -> None:
        with self._lock:
            self._stop_current()
            self._generation += 1
            self._remaining = 0

    def _run(self, generation: int, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_seconds):
            remaining = self._tick(generation)
            if remaining is None or remaining == 0:
                return

    def _tick(self, generation: int) -> int | None:
        with self._lock:
            if generation != self._generation or self._remaining == 0:
                return None
            self._remaining -= 1
            remaining = self._remaining
        if self._on_tick is not None:
            self._on_tick(remaining)
        if remaining == 0:
            self._expire()
        return remaining

    def _expire(self) -> None:
        Log.debug("Cooldown expired")
        if self._on_expire is not None:
            self._on_expire()

    def _stop_current(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
            self._stop_event = None
