"""
事件总线模块。
"""

from .bus import VETOED, EventBus
from .history import EventHistory
from .models import EventRecord, ListenerOutcome, Subscription
from .namespace import NamespacedBus
from .names import Events
from .patterns import WILDCARD_CHANNEL, pattern_to_regex

__all__ = [
    "EventBus",
    "VETOED",
    "EventHistory",
    "EventRecord",
    "ListenerOutcome",
    "Subscription",
    "NamespacedBus",
    "Events",
    "WILDCARD_CHANNEL",
    "pattern_to_regex",
]
