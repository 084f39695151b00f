"""
Sun Viewer Display Layer

Qt-free controller and keyboard bindings, plus the PyQt6 window, widgets
and archive image client.
"""

# Lazy imports so the controller can be used without PyQt6 installed
def __getattr__(name):
    if name == 'SunViewerMainWindow':
        from .main_window import SunViewerMainWindow
        return SunViewerMainWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = ['SunViewerMainWindow']
