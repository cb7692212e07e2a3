from dataclasses import dataclass, asdict
from typing import Callable, ClassVar, List, Optional

from nftledger.logger import get_logger

log = get_logger('Events')


# ---------------------------------------------------------------------------
#  Events. None in an account field means no account, i.e. a mint has from_=None.
# ---------------------------------------------------------------------------

class LedgerEvent:
    event_name: ClassVar[str] = ''

    def to_dict(self) -> dict:
        d = asdict(self)
        if 'from_' in d:
            d['from'] = d.pop('from_')
        return {'event': self.event_name, **d}


@dataclass(frozen=True)
class Transfer(LedgerEvent):
    """Ownership of a token changed, including its creation."""
    event_name: ClassVar[str] = 'Transfer'

    from_: Optional[str]
    to: str
    token_id: int


@dataclass(frozen=True)
class Approval(LedgerEvent):
    """The approved delegate of a token was set, reaffirmed or cleared."""
    event_name: ClassVar[str] = 'Approval'

    owner: str
    approved: Optional[str]
    token_id: int


@dataclass(frozen=True)
class ApprovalForAll(LedgerEvent):
    event_name: ClassVar[str] = 'ApprovalForAll'

    owner: str
    operator: str
    approved: bool


class EventLog:
    """
    Append-only sink for committed events.

    Subscribers get each event as it is recorded. The registry never reads
    the log back, so a failing subscriber is logged and skipped.
    """

    def __init__(self):
        self.events: List[LedgerEvent] = []
        self.subscribers: List[Callable] = []

    def subscribe(self, callback: Callable):
        self.subscribers.append(callback)

    def emit(self, event: LedgerEvent):
        self.events.append(event)

        for callback in self.subscribers:
            try:
                callback(event)
            except Exception as e:
                log.error('Subscriber {} failed on {}: {}'.format(callback, event.event_name, e))

    def of_type(self, event_name: str) -> List[LedgerEvent]:
        return [e for e in self.events if e.event_name == event_name]

    def clear(self):
        self.events = []

    def __iter__(self):
        return iter(list(self.events))

    def __len__(self):
        return len(self.events)
