# fintrack/client/signals.py
from typing import Awaitable, Callable, List

Listener = Callable[[], Awaitable[None]]

class SessionSignal:
    """
    Fired whenever the credential held by the client may have changed
    (sign-in, sign-up, sign-out, or a refresh done behind the caller's back).
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def emit(self) -> None:
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            await listener()
