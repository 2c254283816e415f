from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from quotemaker.services.quote_extractor import Quote, QuoteOutcome


class EngineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


@dataclass
class RunState:
    """Mutable run state; only the engine thread writes ``cycle`` and ``quote``."""

    cycle: int = 0
    quote: Optional["Quote"] = None
    failures: int = 0
    last_outcome: Optional["QuoteOutcome"] = None
    demo_warning_sent: bool = False
    stop_event: threading.Event = field(default_factory=threading.Event)

    @property
    def stop_requested(self) -> bool:
        return self.stop_event.is_set()
