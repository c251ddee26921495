"""
Short-lived messages shown to the player after interactions.

Each message lives for a fixed time and the log only keeps the most recent
few, dropping the oldest first.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

DEFAULT_CAPACITY: int = 5
DEFAULT_LIFETIME: float = 1.5  # seconds

Clock = Callable[[], float]


@dataclass
class TimedMessage:
    """A message plus the bookkeeping needed to expire it."""

    text: str
    created_at: float
    lifetime: float = DEFAULT_LIFETIME
    remaining: float = DEFAULT_LIFETIME

    def refresh(self, now: float) -> None:
        """Recompute remaining lifetime from the elapsed time."""
        self.remaining = self.lifetime - (now - self.created_at)

    @property
    def expired(self) -> bool:
        return self.remaining <= 0


class MessageLog:
    """
    Bounded log of timed messages, oldest first.

    The clock defaults to time.monotonic; tests pass a fake clock to control
    expiry.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        lifetime: float = DEFAULT_LIFETIME,
        clock: Optional[Clock] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity: int = capacity
        self.lifetime: float = lifetime
        self._clock: Clock = clock or time.monotonic
        self._messages: List[TimedMessage] = []

    def __len__(self) -> int:
        return len(self._messages)

    def add(self, text: str) -> TimedMessage:
        """Append a message, evicting the oldest ones beyond capacity."""
        message = TimedMessage(
            text=text,
            created_at=self._clock(),
            lifetime=self.lifetime,
            remaining=self.lifetime,
        )
        self._messages.append(message)
        if len(self._messages) > self.capacity:
            self._messages = self._messages[-self.capacity :]
        return message

    def update(self) -> None:
        """Refresh remaining lifetimes and drop expired messages."""
        now = self._clock()
        for message in self._messages:
            message.refresh(now)
        self._messages = [m for m in self._messages if not m.expired]

    def get_messages(self) -> List[str]:
        """
        Texts of the live messages, most recent last.

        Messages that have run out of time are left out even if update()
        has not pruned them yet.
        """
        now = self._clock()
        return [
            m.text
            for m in self._messages
            if m.lifetime - (now - m.created_at) > 0
        ]

    def entries(self) -> List[TimedMessage]:
        """The stored messages themselves, as of the last update()."""
        return list(self._messages)

    def clear(self) -> None:
        self._messages.clear()
