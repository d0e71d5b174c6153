"""
Playback controller for a precomputed simulation timeline.

The engine is run once per configuration; playback only moves a cursor over
the resulting snapshots. The UI calls `tick()` on a timer while playing.
"""

from dataclasses import dataclass

MIN_SPEED = 0.5
MAX_SPEED = 3.0


@dataclass
class Playback:
    """
    Cursor over the snapshots of one SimulationResult.

    Attributes:
        total_steps (int): Number of snapshots, including the initial one
        current_step (int): Snapshot currently displayed
        playing (bool): True while the timer should advance the cursor
        speed (float): Steps per second
    """
    total_steps: int
    current_step: int = 0
    playing: bool = False
    speed: float = 1.0

    def __post_init__(self):
        if self.total_steps < 1:
            raise ValueError("A timeline has at least the initial snapshot")
        self.set_speed(self.speed)
        self.current_step = self._clamp(self.current_step)

    @property
    def last_step(self) -> int:
        return self.total_steps - 1

    @property
    def at_end(self) -> bool:
        return self.current_step >= self.last_step

    @property
    def delay(self) -> float:
        """Seconds between two ticks."""
        return 1.0 / self.speed

    def _clamp(self, step: int) -> int:
        return max(0, min(step, self.last_step))

    def set_speed(self, speed: float):
        if not MIN_SPEED <= speed <= MAX_SPEED:
            raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}")
        self.speed = float(speed)

    def play(self):
        # Replaying a finished timeline starts over
        if self.at_end:
            self.current_step = 0
        self.playing = True

    def pause(self):
        self.playing = False

    def reset(self):
        self.playing = False
        self.current_step = 0

    def skip_to_end(self):
        self.playing = False
        self.current_step = self.last_step

    def step_forward(self):
        self.current_step = self._clamp(self.current_step + 1)

    def step_back(self):
        self.current_step = self._clamp(self.current_step - 1)

    def tick(self) -> bool:
        """
        Advance one step if playing.

        Returns:
            bool: True if the cursor moved
        """
        if not self.playing:
            return False
        if self.at_end:
            self.playing = False
            return False
        self.current_step += 1
        if self.at_end:
            self.playing = False
        return True
