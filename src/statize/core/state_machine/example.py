"""
Example of using the stateful mixin.

This module models a support ticket tracked by two independent profiles: a
lifecycle (open, closed, kiv, archived) and a processing stage (queued,
active, done), each stored in its own attribute.
"""

from typing import List, Optional

from .base import Stateful
from .builder import stateful
from .protocols import TransitionInfo, TransitionPhase


def guard_archive(info: TransitionInfo) -> Optional[bool]:
    """Only tickets flagged as archivable may be archived."""
    if info.phase is TransitionPhase.BEFORE:
        return info.host.archivable
    return None


def record_history(info: TransitionInfo) -> None:
    """Keep an audit trail of completed transitions on the ticket."""
    if info.phase is TransitionPhase.AFTER:
        info.host.history.append(f"{info.profile}:{info.from_state}->{info.to_state}")


class Ticket(Stateful):
    """A support ticket with a lifecycle and a processing stage."""

    lifecycle = stateful(initial_state="open")
    lifecycle.event("close", {"open": "closed"}, record_history)
    lifecycle.event("kiv", {"open": "kiv", "closed": "kiv"}, record_history)
    lifecycle.event("reopen", {"kiv": "open"}, record_history)
    lifecycle.event("archive", {"closed": "archived"}, guard_archive)
    lifecycle.state_meaning(
        {
            "open": "active",
            "kiv": "active",
            "closed": "inactive",
            "archived": "inactive",
        }
    )

    processing = stateful(
        profile="processing", initial_state="queued", state_attr_name="stage"
    )
    processing.event("start", {"queued": "active"})
    processing.event("finish", {"active": "done"}, record_history)
    processing.event("requeue", {"active": "queued", "done": "queued"})

    def __init__(self, title: str, archivable: bool = False):
        self.title = title
        self.archivable = archivable
        self.state: Optional[str] = None
        self.stage: Optional[str] = None
        self.history: List[str] = []
        self.init_state("processing")
        self.init_state()


def run_example() -> Ticket:
    """Run the ticket workflow example."""
    ticket = Ticket("Printer on fire")
    print(f"Initial state: {ticket.current_state()} (stage {ticket.stage})")

    ticket.trigger_event("close")
    ticket.trigger_event("kiv")
    ticket.trigger_event("reopen")
    print(
        f"Back to: {ticket.current_state()}, "
        f"meaning {ticket.current_state_meaning()}"
    )

    ticket.activate_state_profile("processing")
    ticket.trigger_event("start")
    ticket.trigger_event("finish", lambda info: print(f"Finished '{info.host.title}'"))
    ticket.activate_state_profile("default")

    print(f"Final state: {ticket.current_state()} (stage {ticket.stage})")
    print(f"History: {ticket.history}")
    return ticket


if __name__ == "__main__":
    run_example()
