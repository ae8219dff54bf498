"""Exponential backoff with jitter for request retries."""

import random
from typing import Optional

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_MULTIPLIER = 1.5
DEFAULT_RANDOMIZATION_FACTOR = 0.5
DEFAULT_MAX_INTERVAL = 60.0


class ExponentialBackoff:
    """
    Growing retry delays with jitter.

    Each delay is drawn uniformly from
    [interval * (1 - randomization_factor), interval * (1 + randomization_factor)],
    after which the interval is multiplied by the multiplier, up to max_interval.
    """

    def __init__(
        self,
        initial_interval: float = DEFAULT_INITIAL_INTERVAL,
        multiplier: float = DEFAULT_MULTIPLIER,
        randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR,
        max_interval: float = DEFAULT_MAX_INTERVAL,
        rng: Optional[random.Random] = None,
    ):
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.randomization_factor = randomization_factor
        self.max_interval = max_interval
        self._rng = rng or random.Random()
        self._current_interval = initial_interval

    def next_backoff(self) -> float:
        """Return the next delay in seconds and advance the schedule."""
        delta = self.randomization_factor * self._current_interval
        delay = self._rng.uniform(self._current_interval - delta, self._current_interval + delta)
        self._current_interval = min(self._current_interval * self.multiplier, self.max_interval)
        return delay

