"""
Page Replacement Engine — FIFO, LRU & Optimal

Deterministic simulation of how a virtual memory manager resolves page faults
against a fixed pool of physical frames. Given a reference string, a frame
capacity and a replacement policy, `simulate` replays every reference and
records a snapshot of the frame pool after each one.

The engine is pure: every call builds its own policy bookkeeping and result,
so calls may be made side by side (e.g. to compare policies).
"""

# =============================================================================
# IMPORTS
# =============================================================================

from collections import deque                # FIFO arrival queue
from dataclasses import dataclass, field     # Immutable snapshot/result records
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


# =============================================================================
# ERRORS & POLICIES
# =============================================================================

class InvalidConfiguration(ValueError):
    """Raised when a simulation is requested with an unusable configuration."""


class ReplacementPolicy:
    """
    Enumeration of available page replacement algorithms.

    FIFO:    First-In-First-Out - replaces the oldest page in memory
    LRU:     Least Recently Used - replaces the page not used for longest time
    OPTIMAL: Belady's algorithm - replaces the page used farthest in the future
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "OPTIMAL"

    ALL = (FIFO, LRU, OPTIMAL)

    @classmethod
    def normalize(cls, policy: str) -> str:
        """
        Map a policy name ('fifo', 'LRU', 'Optimal', ...) onto its constant.

        Raises:
            InvalidConfiguration: If the name is not a known policy
        """
        name = str(policy).strip().upper()
        if name not in cls.ALL:
            raise InvalidConfiguration(f"Unknown replacement policy: {policy!r}")
        return name


# =============================================================================
# SIMULATION RECORDS
# =============================================================================

@dataclass(frozen=True)
class StepSnapshot:
    """
    State of the frame pool after one reference has been processed.

    The first snapshot of every run (index 0) is the empty pool before any
    reference; it carries no page and no fault.

    Attributes:
        index (int): Position on the timeline (0 = initial, t + 1 = reference t)
        frames (Tuple[Optional[int], ...]): Page held by each slot, None if empty
        page (Optional[int]): Requested page, None for the initial snapshot
        is_fault (bool): True if the request was a page fault
        evicted_frame (Optional[int]): Slot that was filled or replaced
        evicted_page (Optional[int]): Victim page removed from that slot, if any
        eviction_order (Tuple[int, ...]): Resident pages, next victim first
        events (Tuple[str, ...]): Log messages produced by this step
    """
    index: int
    frames: Tuple[Optional[int], ...]
    page: Optional[int] = None
    is_fault: bool = False
    evicted_frame: Optional[int] = None
    evicted_page: Optional[int] = None
    eviction_order: Tuple[int, ...] = ()
    events: Tuple[str, ...] = field(default=(), repr=False)

    @property
    def is_initial(self) -> bool:
        return self.page is None

    @property
    def is_hit(self) -> bool:
        return not self.is_initial and not self.is_fault

    @property
    def hit_frame(self) -> Optional[int]:
        """Slot holding the requested page when the request was a hit."""
        if not self.is_hit:
            return None
        return self.frames.index(self.page)


@dataclass(frozen=True)
class SimulationResult:
    """
    Complete outcome of one simulation run.

    Attributes:
        policy (str): Replacement policy used
        frame_capacity (int): Number of frames in the pool
        references (Tuple[int, ...]): The reference string that was replayed
        steps (Tuple[StepSnapshot, ...]): Initial snapshot plus one per reference
        hits (int): Total page hits
        faults (int): Total page faults
        event_log (Tuple[str, ...]): Human readable log of every event
    """
    policy: str
    frame_capacity: int
    references: Tuple[int, ...]
    steps: Tuple[StepSnapshot, ...]
    hits: int = 0
    faults: int = 0
    event_log: Tuple[str, ...] = field(default=(), repr=False)

    @property
    def total_refs(self) -> int:
        return self.hits + self.faults

    @property
    def hit_ratio(self) -> float:
        return self.hits / self.total_refs if self.total_refs > 0 else 0.0

    @property
    def fault_ratio(self) -> float:
        return self.faults / self.total_refs if self.total_refs > 0 else 0.0

    @property
    def replacements(self) -> int:
        """Number of faults that had to evict a resident page."""
        return sum(1 for s in self.steps if s.evicted_page is not None)

    def counts_upto(self, step: int) -> Tuple[int, int]:
        """
        Running (hits, faults) for the timeline prefix ending at `step`.

        Args:
            step (int): Snapshot index, clamped to the valid range

        Returns:
            Tuple[int, int]: Hits and faults among snapshots 1..step
        """
        step = max(0, min(step, len(self.steps) - 1))
        prefix = self.steps[1:step + 1]
        faults = sum(1 for s in prefix if s.is_fault)
        return len(prefix) - faults, faults

    def events_upto(self, step: int) -> List[str]:
        """Event log entries produced by snapshots 1..step."""
        return [ev for s in self.steps[:max(0, step) + 1] for ev in s.events]

    def get_stats(self) -> Dict[str, float]:
        """
        Calculate and return simulation statistics.

        Returns:
            Dict[str, float]: hits, faults, hit_ratio, fault_rate, total_refs
        """
        return {
            "hits": self.hits,
            "faults": self.faults,
            "hit_ratio": round(self.hit_ratio, 4),
            "fault_rate": round(self.fault_ratio, 4),
            "total_refs": self.total_refs,
        }


# =============================================================================
# POLICY BOOKKEEPING - one fresh instance per run
# =============================================================================

class _FifoState:
    """Arrival queue of resident pages, oldest at the head."""

    def __init__(self, references: Sequence[int]):
        self.queue: deque = deque()

    def touch(self, page: int, t: int):
        # FIFO ignores hits
        pass

    def load(self, page: int, t: int):
        self.queue.append(page)

    def evict(self, page: int):
        self.queue.remove(page)

    def eviction_order(self, frames: List[Optional[int]], t: int) -> List[int]:
        return list(self.queue)


class _LruState:
    """Last-used timestamp (reference index) of every resident page."""

    def __init__(self, references: Sequence[int]):
        self.last_used: Dict[int, int] = {}

    def touch(self, page: int, t: int):
        self.last_used[page] = t

    def load(self, page: int, t: int):
        self.last_used[page] = t

    def evict(self, page: int):
        del self.last_used[page]

    def eviction_order(self, frames: List[Optional[int]], t: int) -> List[int]:
        # Oldest timestamp first, lowest slot index on ties
        resident = [(self.last_used[p], slot, p)
                    for slot, p in enumerate(frames) if p is not None]
        return [p for _, _, p in sorted(resident)]


class _OptimalState:
    """Stateless apart from the reference string it looks ahead into."""

    def __init__(self, references: Sequence[int]):
        self.references = references

    def touch(self, page: int, t: int):
        pass

    def load(self, page: int, t: int):
        pass

    def evict(self, page: int):
        pass

    def next_use(self, page: int, t: int) -> float:
        """Index of the next reference to `page` after time `t`, inf if none."""
        for i in range(t + 1, len(self.references)):
            if self.references[i] == page:
                return i
        return float("inf")

    def eviction_order(self, frames: List[Optional[int]], t: int) -> List[int]:
        # Farthest next use first, lowest slot index on ties
        resident = [(-self.next_use(p, t), slot, p)
                    for slot, p in enumerate(frames) if p is not None]
        return [p for _, _, p in sorted(resident)]


_POLICY_STATES = {
    ReplacementPolicy.FIFO: _FifoState,
    ReplacementPolicy.LRU: _LruState,
    ReplacementPolicy.OPTIMAL: _OptimalState,
}


# =============================================================================
# SIMULATION ENGINE
# =============================================================================

def _check_capacity(frame_capacity) -> int:
    # bool is an int subclass but never a meaningful frame count
    if isinstance(frame_capacity, bool) or not isinstance(frame_capacity, int):
        raise InvalidConfiguration(
            f"Frame capacity must be an integer, got {frame_capacity!r}")
    if frame_capacity < 1:
        raise InvalidConfiguration(
            f"Frame capacity must be at least 1, got {frame_capacity}")
    return frame_capacity


def simulate(references: Iterable[int], frame_capacity: int,
             policy: str = ReplacementPolicy.FIFO) -> SimulationResult:
    """
    Replay a reference string against a frame pool under one policy.

    For every reference the engine:
    1. Reports a hit if the page is resident (LRU refreshes its timestamp)
    2. Otherwise fills the lowest empty slot, if any
    3. Otherwise evicts the victim chosen by the policy and reuses its slot

    Args:
        references (Iterable[int]): Page numbers in access order
        frame_capacity (int): Number of physical frames, at least 1
        policy (str): One of ReplacementPolicy.ALL (case-insensitive)

    Returns:
        SimulationResult: Initial snapshot plus one snapshot per reference

    Raises:
        InvalidConfiguration: If the capacity or the policy is invalid
    """
    # Validate everything before touching a single reference
    frame_capacity = _check_capacity(frame_capacity)
    policy = ReplacementPolicy.normalize(policy)
    references = tuple(references)

    state = _POLICY_STATES[policy](references)
    frames: List[Optional[int]] = [None] * frame_capacity
    slot_of: Dict[int, int] = {}   # resident page -> slot index

    steps: List[StepSnapshot] = [StepSnapshot(index=0, frames=tuple(frames))]
    event_log: List[str] = []
    hits = 0
    faults = 0

    for t, page in enumerate(references):
        evicted_frame = None
        evicted_page = None
        events: List[str] = []

        # ----- PAGE HIT -----
        if page in slot_of:
            hits += 1
            state.touch(page, t)
            events.append(f"Hit: Page {page} in Frame {slot_of[page]}")
            is_fault = False

        # ----- PAGE FAULT -----
        else:
            faults += 1
            is_fault = True
            events.append(f"Fault: Page {page} not in memory")

            if len(slot_of) < frame_capacity:
                # Free frame available - take the lowest one
                evicted_frame = frames.index(None)
                events.append(f"Loaded: Page {page} -> Frame {evicted_frame}")
            else:
                evicted_page = state.eviction_order(frames, t)[0]
                evicted_frame = slot_of.pop(evicted_page)
                state.evict(evicted_page)
                events.append(
                    f"Evicting: Page {evicted_page} from Frame {evicted_frame}")
                events.append(
                    f"Loaded: Page {page} -> Frame {evicted_frame} (replaced)")

            frames[evicted_frame] = page
            slot_of[page] = evicted_frame
            state.load(page, t)

        event_log.extend(events)
        steps.append(StepSnapshot(
            index=t + 1,
            frames=tuple(frames),
            page=page,
            is_fault=is_fault,
            evicted_frame=evicted_frame,
            evicted_page=evicted_page,
            eviction_order=tuple(state.eviction_order(frames, t)),
            events=tuple(events),
        ))

    return SimulationResult(
        policy=policy,
        frame_capacity=frame_capacity,
        references=references,
        steps=tuple(steps),
        hits=hits,
        faults=faults,
        event_log=tuple(event_log),
    )


# =============================================================================
# COMPARISON HELPERS
# =============================================================================

def compare_policies(references: Iterable[int], frame_capacity: int,
                     policies: Sequence[str] = ReplacementPolicy.ALL
                     ) -> Dict[str, SimulationResult]:
    """Run the same reference string under several policies."""
    references = tuple(references)
    return {ReplacementPolicy.normalize(p): simulate(references, frame_capacity, p)
            for p in policies}


def fault_curve(references: Iterable[int], policy: str,
                capacities: Iterable[int]) -> List[Tuple[int, int]]:
    """
    Fault count for each frame capacity, e.g. to expose Belady's anomaly.

    Returns:
        List[Tuple[int, int]]: (capacity, faults) pairs in the given order
    """
    references = tuple(references)
    return [(c, simulate(references, c, policy).faults) for c in capacities]
