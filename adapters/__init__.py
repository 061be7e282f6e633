"""
Adapters package - External service connections.
In-process realtime broadcaster for WebSocket subscribers.
"""

from adapters.pubsub import Broadcaster, broadcaster

__all__ = [
    "Broadcaster",
    "broadcaster",
]
