"""
Terminal Cart Registry for Truck POS
====================================

Holds one in-memory Cart per POS terminal. Carts are never persisted: a
restart empties every terminal, which matches how the order screen behaves.

Eviction Strategy:
------------------
1. **TTL-based**: A terminal not touched within CART_TTL_SECONDS is dropped
   on the next sweep. Sweeps run on every lookup; the registry is small.

2. **LRU-based**: When CART_MAX_TERMINALS is reached, the least recently
   used terminal is dropped to make room.

Thread Safety:
--------------
FastAPI runs sync routes in a thread pool, so every registry operation is
guarded by a lock. A terminal session also carries its own checkout lock;
the Cart objects themselves are only mutated by the one terminal that
owns them.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..config import CART_MAX_TERMINALS, CART_TTL_SECONDS
from .cart import Cart

logger = logging.getLogger(__name__)


@dataclass
class TerminalSession:
    """Cart plus the order-level discount currently entered at a terminal.

    checkout_lock is held for the whole of a checkout so a second
    "complete" on the same terminal cannot record the same cart again.
    """

    cart: Cart = field(default_factory=Cart)
    discount_percent: Optional[float] = None
    last_access: float = field(default_factory=time.time)
    checkout_lock: threading.Lock = field(default_factory=threading.Lock)


class CartRegistry:
    """Thread-safe map of terminal id -> TerminalSession."""

    def __init__(self, ttl_seconds: int = CART_TTL_SECONDS, max_terminals: int = CART_MAX_TERMINALS):
        self.ttl_seconds = ttl_seconds
        self.max_terminals = max_terminals
        self._sessions: Dict[str, TerminalSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _sweep_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [tid for tid, s in self._sessions.items() if now - s.last_access > self.ttl_seconds]
        for tid in expired:
            del self._sessions[tid]
        if expired:
            logger.debug("Dropped %d idle terminal carts", len(expired))

    def _evict_oldest(self) -> None:
        # Caller holds the lock
        oldest = min(self._sessions.items(), key=lambda kv: kv[1].last_access)[0]
        del self._sessions[oldest]
        logger.debug("Evicted cart for terminal %s", oldest)

    def get(self, terminal_id: str) -> TerminalSession:
        """Return the terminal's session, creating an empty one if needed."""
        now = time.time()
        with self._lock:
            self._sweep_expired(now)
            session = self._sessions.get(terminal_id)
            if session is None:
                if len(self._sessions) >= self.max_terminals:
                    self._evict_oldest()
                session = TerminalSession(last_access=now)
                self._sessions[terminal_id] = session
                logger.info("Opened cart for terminal %s", terminal_id)
            session.last_access = now
            return session

    def drop(self, terminal_id: str) -> None:
        with self._lock:
            self._sessions.pop(terminal_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


TERMINAL_CARTS = CartRegistry()


def get_cart_registry() -> CartRegistry:
    """FastAPI dependency returning the process-wide registry."""
    return TERMINAL_CARTS
