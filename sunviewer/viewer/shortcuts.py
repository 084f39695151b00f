"""
Keyboard Shortcuts

Binds key names to controller operations. The shortcuts attach to any
input-event source exposing subscribe(callback) / unsubscribe(callback),
where callbacks receive a key name such as 'ArrowLeft'.
"""

from typing import Callable, Dict, Optional, Protocol

from ..common.logging_config import ServiceLogger
from .controller import SunViewerController, ViewerSnapshot


KeyCallback = Callable[[str], None]

DEFAULT_BINDINGS = {
    'ArrowLeft': 'step_prev',
    'ArrowRight': 'step_next',
}


class InputEventSource(Protocol):
    def subscribe(self, callback: KeyCallback) -> None: ...

    def unsubscribe(self, callback: KeyCallback) -> None: ...


class KeyboardShortcuts:
    """Route key presses from an input-event source to the controller"""

    def __init__(self, controller: SunViewerController,
                 bindings: Optional[Dict[str, str]] = None):
        self.controller = controller
        self.bindings = dict(DEFAULT_BINDINGS if bindings is None else bindings)
        self.source: Optional[InputEventSource] = None
        self.logger = ServiceLogger("sunviewer", "shortcuts")

        for key, operation in self.bindings.items():
            if not callable(getattr(controller, operation, None)):
                raise ValueError(f"Key {key!r} bound to unknown operation {operation!r}")

    def attach(self, source: InputEventSource):
        """Start listening to a source (detaches from any previous one)"""
        if self.source is not None:
            self.detach()
        source.subscribe(self.handle_key)
        self.source = source

    def detach(self):
        """Stop listening"""
        if self.source is None:
            return
        self.source.unsubscribe(self.handle_key)
        self.source = None

    def handle_key(self, key: str) -> Optional[ViewerSnapshot]:
        """Run the operation bound to key; None for unbound keys"""
        operation = self.bindings.get(key)
        if operation is None:
            return None

        self.logger.debug(f"Shortcut {key} -> {operation}")
        return getattr(self.controller, operation)()
