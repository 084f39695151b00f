"""
Sun Viewer Widgets

The snapshot panel (channel title, image, local timestamp, save button),
a load-state indicator for the status bar, and the application-wide key
event source used by the keyboard shortcuts.
"""

from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import List, Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QSizePolicy, QFileDialog, QMessageBox, QToolTip
)
from PyQt6.QtGui import QPixmap, QCursor, QWindow
from PyQt6.QtCore import Qt, QObject, QEvent, pyqtSlot

from ..common.constants import IMAGES_PATH
from .shortcuts import KeyCallback
from .theme import ACCENT, BORDER, MUTED, TEXT

IMAGE_STYLE = f"background-color: #0a0a0a; border: 1px solid {BORDER}; border-radius: 4px;"
TIMESTAMP_STYLE = f"color: {MUTED}; font-size: 11px;"
TIMESTAMP_ERROR_STYLE = "color: #ff6666; font-size: 11px;"
SAVE_BUTTON_STYLE = f"""
    QPushButton {{
        background-color: {ACCENT};
        color: #000000;
        border: none;
        border-radius: 3px;
        padding: 4px 8px;
        font-size: 11px;
    }}
    QPushButton:disabled {{
        background-color: #444444;
        color: {MUTED};
    }}
"""


def suggested_filename(image_path: str, base_path: str = IMAGES_PATH) -> str:
    """/img/sun/aia/0094/2012/030405.jpg -> aia_0094_2012_030405.jpg"""
    path = PurePosixPath(image_path)
    try:
        parts = path.relative_to(PurePosixPath(base_path)).parts
    except ValueError:
        parts = path.parts[1:] if path.is_absolute() else path.parts
    return "_".join(parts) or path.name


class SunImagePanel(QWidget):
    """
    Displays the image of the current snapshot.

    ┌─────────────────────────────┐
    │      SDO/AIA 94 A           │
    ├─────────────────────────────┤
    │          [IMAGE]            │
    ├─────────────────────────────┤
    │ 2012-03-04 05:00     [Save] │
    └─────────────────────────────┘
    """

    def __init__(self, base_path: str = IMAGES_PATH, parent=None):
        super().__init__(parent)
        self.base_path = base_path
        self._image_path: Optional[str] = None
        self._image_data: Optional[bytes] = None
        self._pixmap: Optional[QPixmap] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(4)

        self.header = QLabel("")
        self.header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.header.setStyleSheet(f"font-weight: bold; font-size: 13px; color: {TEXT}; padding: 4px;")
        layout.addWidget(self.header)

        self.image_label = QLabel("Loading...")
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumSize(400, 400)
        self.image_label.setStyleSheet(IMAGE_STYLE)
        self.image_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout.addWidget(self.image_label, stretch=1)

        layout.addLayout(self._build_footer())

    def _build_footer(self) -> QHBoxLayout:
        footer = QHBoxLayout()
        footer.setSpacing(8)

        self.timestamp_label = QLabel("")
        self.timestamp_label.setStyleSheet(TIMESTAMP_STYLE)
        footer.addWidget(self.timestamp_label, stretch=1)

        self.save_btn = QPushButton("Save")
        self.save_btn.setFixedWidth(50)
        self.save_btn.setToolTip("Save image to file")
        self.save_btn.setStyleSheet(SAVE_BUTTON_STYLE)
        self.save_btn.setEnabled(False)
        self.save_btn.clicked.connect(self.save_image)
        footer.addWidget(self.save_btn)

        return footer

    def show_snapshot(self, title: str, description: str, timestamp: datetime, image_path: str):
        """Switch to a new snapshot and wait for its image."""
        self._image_path = image_path
        self._image_data = None
        self._pixmap = None

        self.header.setText(title)
        self.header.setToolTip(description)
        self.image_label.setToolTip(description)
        self.image_label.clear()
        self.image_label.setText("Loading...")
        self.timestamp_label.setText(timestamp.strftime('%Y-%m-%d %H:%M %Z').strip())
        self.timestamp_label.setStyleSheet(TIMESTAMP_STYLE)
        self.save_btn.setEnabled(False)

    @pyqtSlot(bytes)
    def update_image(self, data: bytes) -> bool:
        """
        Display image data for the current snapshot.

        Returns:
            False if the data could not be decoded
        """
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            self.image_label.setText("Error loading image")
            self.save_btn.setEnabled(False)
            return False

        self._image_data = data
        self._pixmap = pixmap
        self._fit_image()
        self.save_btn.setEnabled(True)
        return True

    def set_error(self, error_msg: str):
        self.image_label.clear()
        self.image_label.setText(f"Image unavailable: {error_msg}")
        self.timestamp_label.setStyleSheet(TIMESTAMP_ERROR_STYLE)
        self.save_btn.setEnabled(False)

    def _fit_image(self):
        if self._pixmap is None or self._pixmap.isNull():
            return
        self.image_label.setPixmap(self._pixmap.scaled(
            self.image_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        ))

    def save_image(self):
        """Ask for a file name and write the raw image bytes."""
        if self._image_data is None or self._image_path is None:
            return

        save_dir = Path.home() / "Downloads"
        if not save_dir.exists():
            save_dir = Path.home()

        filepath, _ = QFileDialog.getSaveFileName(
            self,
            "Save Solar Image",
            str(save_dir / suggested_filename(self._image_path, self.base_path)),
            "JPEG Images (*.jpg);;All Files (*)"
        )
        if not filepath:
            return

        try:
            Path(filepath).write_bytes(self._image_data)
        except OSError as e:
            QMessageBox.warning(self, "Save Failed", f"Could not save image: {e}")
            return

        QToolTip.showText(QCursor.pos(), f"Saved: {Path(filepath).name}", self, self.rect(), 2000)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._fit_image()


class StatusIndicator(QWidget):
    """Coloured dot plus label showing the image load state."""

    STATES = {
        'loaded': ("Loaded", "#44ff44"),
        'loading': ("Loading...", "#ffff44"),
        'error': ("Unavailable", "#ff4444"),
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.indicator = QLabel()
        self.indicator.setFixedSize(10, 10)
        self.label = QLabel()
        layout.addWidget(self.indicator)
        layout.addWidget(self.label)

        self.state = None
        self.set_loading()

    def _set_state(self, state: str):
        text, color = self.STATES[state]
        self.state = state
        self.indicator.setStyleSheet(f"background-color: {color}; border-radius: 5px;")
        self.label.setText(text)
        self.label.setStyleSheet(f"color: {color}; font-size: 11px;")

    def set_loaded(self):
        self._set_state('loaded')

    def set_loading(self):
        self._set_state('loading')

    def set_error(self):
        self._set_state('error')


class KeyEventSource(QObject):
    """
    Application-wide key listener.

    Installed as an application event filter; publishes 'ArrowLeft' /
    'ArrowRight' key names to subscribers without consuming the event.
    Only presses delivered to top-level windows are seen, so a key that
    propagates through parent widgets is published once.
    """

    KEY_NAMES = {
        Qt.Key.Key_Left.value: 'ArrowLeft',
        Qt.Key.Key_Right.value: 'ArrowRight',
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        self._callbacks: List[KeyCallback] = []

    def subscribe(self, callback: KeyCallback):
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: KeyCallback):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def eventFilter(self, obj, event):
        if (event.type() == QEvent.Type.KeyPress and isinstance(obj, QWindow)
                and not event.isAutoRepeat()):
            name = self.KEY_NAMES.get(event.key())
            if name is not None:
                for callback in list(self._callbacks):
                    callback(name)
        return False
