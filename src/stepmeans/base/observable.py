"""
Minimal publish/subscribe mechanism used by the clustering engine.

Handlers are registered per event name and invoked synchronously, in
registration order, whenever that event is triggered.
"""

from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field

WILDCARD = '*'


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`Observable.subscribe`.

    Compared by identity, so registering the same handler twice yields two
    independent subscriptions.
    """

    event: str
    handler: Callable[..., Any]
    once: bool = False
    active: bool = field(default=True, init=False)


def _check_handler(method: str, handler: Any) -> None:
    if not callable(handler):
        raise TypeError(f'Second argument for "{method}" method must be callable, '
                        f'got {type(handler).__name__}')


class Observable:
    """Named-event registry with one-shot support.

    Example:
        >>> events = Observable()
        >>> events.on('end', lambda state: print(state.iterations))
        >>> events.trigger('end', state)
    """

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def subscribe(self, event: str, handler: Callable[..., Any],
                  once: bool = False) -> Subscription:
        """Register a handler and return its subscription handle."""
        _check_handler('one' if once else 'on', handler)
        subscription = Subscription(event, handler, once)
        self._subscriptions.setdefault(event, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription. Returns False if it was no longer registered."""
        registered = self._subscriptions.get(subscription.event, [])
        if subscription not in registered:
            return False
        registered.remove(subscription)
        subscription.active = False
        if not registered:
            del self._subscriptions[subscription.event]
        return True

    def publish(self, event: str, payload: Any) -> None:
        """Deliver a single payload to every handler of ``event``."""
        self.trigger(event, payload)

    def on(self, name: str, handler: Callable[..., Any]) -> 'Observable':
        """Register ``handler`` for ``name``. Returns self for chaining."""
        self.subscribe(name, handler)
        return self

    def one(self, name: str, handler: Callable[..., Any]) -> 'Observable':
        """Register ``handler`` to be called at most once."""
        self.subscribe(name, handler, once=True)
        return self

    def off(self, name: str, handler: Optional[Callable[..., Any]] = None) -> None:
        """Remove handlers.

        Args:
            name: Event name, or ``'*'`` to clear every event
            handler: Specific handler to remove; all handlers of ``name`` if None
        """
        if name == WILDCARD:
            for subscriptions in self._subscriptions.values():
                for subscription in subscriptions:
                    subscription.active = False
            self._subscriptions = {}
            return

        if handler is not None:
            _check_handler('off', handler)

        if name not in self._subscriptions:
            return

        if handler is None:
            for subscription in self._subscriptions.pop(name):
                subscription.active = False
            return

        for subscription in list(self._subscriptions[name]):
            # == so that bound methods of the same object match
            if subscription.handler == handler:
                self.unsubscribe(subscription)

    def trigger(self, name: str, *args: Any) -> 'Observable':
        """Synchronously call every handler of ``name`` with ``args``.

        Handlers registered while triggering are not called until the next
        trigger. Handlers removed while triggering are skipped.
        """
        for subscription in list(self._subscriptions.get(name, ())):
            if not subscription.active:
                continue
            if subscription.once:
                self.unsubscribe(subscription)
            subscription.handler(*args)
        return self

    def handlers(self, name: str) -> List[Callable[..., Any]]:
        """Currently registered handlers of ``name``, in call order."""
        return [s.handler for s in self._subscriptions.get(name, ())]

    def __len__(self) -> int:
        return sum(len(subs) for subs in self._subscriptions.values())
