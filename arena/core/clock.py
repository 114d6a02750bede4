class GameClock:
    """Game-time source. Advanced by the loop (or by tests) with explicit deltas."""

    def __init__(self):
        self.time_since_startup = 0.0
        self.time_started = 0.0
        self.delta = 0.0

    def tick(self, dt: float) -> None:
        self.delta = dt
        self.time_since_startup += dt

    def mark_started(self) -> None:
        """Reset the "round started" reference point (entering the playing state)."""
        self.time_started = self.time_since_startup

    def seconds_since_start(self) -> float:
        return self.time_since_startup - self.time_started
