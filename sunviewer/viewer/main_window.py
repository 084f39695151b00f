"""
Sun Viewer Main Window

Navigation toolbar (previous, date/time, channel, next) above the current
snapshot. All state lives in the controller; the window renders its
snapshots and reports image load results back to it.
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton,
    QStatusBar, QToolBar, QComboBox, QDateTimeEdit, QMessageBox, QSizePolicy
)
from PyQt6.QtGui import QAction
from PyQt6.QtCore import Qt, QDateTime, pyqtSlot

from ..common.constants import TIMESTAMP_FORMAT
from .channels import SUN_CHANNELS, IMAGE_CREDITS, get_channel_by_id, get_display_name
from .controller import SunViewerController, ViewerSnapshot
from .image_client import ArchiveImageClient
from .widgets import SunImagePanel, StatusIndicator

# Qt spelling of TIMESTAMP_FORMAT
QT_TIMESTAMP_FORMAT = "yyyy-MM-dd'T'HH:mm"


def to_qdatetime(value) -> QDateTime:
    """Convert a local datetime to QDateTime via its minute-precision text."""
    return QDateTime.fromString(value.strftime(TIMESTAMP_FORMAT), QT_TIMESTAMP_FORMAT)


class SunViewerMainWindow(QMainWindow):
    """
    Main window for stepping through archived solar images.

    ┌──────────────────────────────────────────────┐
    │ [<] [2012-03-04 05:00] [SDO/AIA 94 A ▾] [>]  │  <- Toolbar
    ├──────────────────────────────────────────────┤
    │               SunImagePanel                  │
    ├──────────────────────────────────────────────┤
    │ credits                                      │
    └──────────────────────────────────────────────┘
    """

    def __init__(self, controller: SunViewerController):
        super().__init__()
        self.setWindowTitle("Sun Viewer - Solar Image Archive")
        self.setMinimumSize(700, 800)

        self.controller = controller
        self.client: Optional[ArchiveImageClient] = None

        self._setup_ui()
        self._setup_toolbar()
        self._setup_statusbar()

        self.controller.subscribe(self.render_snapshot)
        self.render_snapshot(self.controller.snapshot)

    def _setup_ui(self):
        """Setup the main UI layout."""
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)

        self.image_panel = SunImagePanel(self.controller.base_path)
        layout.addWidget(self.image_panel, stretch=1)

        credits = QLabel(IMAGE_CREDITS)
        credits.setAlignment(Qt.AlignmentFlag.AlignCenter)
        credits.setStyleSheet("color: #888888; font-size: 11px;")
        layout.addWidget(credits)

    def _setup_toolbar(self):
        """Setup the navigation toolbar."""
        toolbar = QToolBar("Navigation")
        toolbar.setMovable(False)
        toolbar.setStyleSheet("""
            QToolBar {
                background-color: #2a2a2a;
                border: none;
                spacing: 10px;
                padding: 5px;
            }
            QPushButton {
                background-color: #353535;
                color: white;
                border: 1px solid #3a3a3a;
                border-radius: 4px;
                padding: 6px 12px;
                min-width: 30px;
            }
            QPushButton:hover {
                background-color: #3a3a3a;
            }
            QPushButton:disabled {
                color: #666666;
            }
        """)
        self.addToolBar(toolbar)

        self.prev_btn = QPushButton("<")
        self.prev_btn.setToolTip("Previous hour (Left arrow)")
        self.prev_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.prev_btn.clicked.connect(self.controller.step_prev)
        toolbar.addWidget(self.prev_btn)

        cursor = self.controller.cursor
        self.dt_input = QDateTimeEdit()
        self.dt_input.setDisplayFormat("yyyy-MM-dd HH:mm")
        self.dt_input.setCalendarPopup(True)
        self.dt_input.setDateTimeRange(to_qdatetime(cursor.minimum), to_qdatetime(cursor.maximum))
        self.dt_input.dateTimeChanged.connect(self._on_datetime_changed)
        toolbar.addWidget(self.dt_input)

        self.channel_combo = QComboBox()
        for channel in SUN_CHANNELS:
            self.channel_combo.addItem(channel['display_name'], channel['id'])
            self.channel_combo.setItemData(
                self.channel_combo.count() - 1,
                channel['description'],
                Qt.ItemDataRole.ToolTipRole
            )
        self.channel_combo.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.channel_combo.currentIndexChanged.connect(self._on_channel_changed)
        toolbar.addWidget(self.channel_combo)

        self.next_btn = QPushButton(">")
        self.next_btn.setToolTip("Next hour (Right arrow)")
        self.next_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.next_btn.clicked.connect(self.controller.step_next)
        toolbar.addWidget(self.next_btn)

        # Spacer
        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        toolbar.addWidget(spacer)

        about_action = QAction("About", self)
        about_action.setToolTip("About this application")
        about_action.triggered.connect(self._show_about)
        toolbar.addAction(about_action)

    def _setup_statusbar(self):
        """Setup the status bar."""
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.status_indicator = StatusIndicator()
        self.status_bar.addWidget(self.status_indicator)

        sep = QLabel(" | ")
        sep.setStyleSheet("color: #666666;")
        self.status_bar.addWidget(sep)

        self.path_label = QLabel("")
        self.path_label.setStyleSheet("color: #aaaaaa;")
        self.status_bar.addWidget(self.path_label)

        cursor = self.controller.cursor
        self.range_label = QLabel(
            f"{cursor.minimum.strftime('%Y-%m-%d %H:%M')} - {cursor.maximum.strftime('%Y-%m-%d %H:%M')}"
        )
        self.range_label.setStyleSheet("color: #888888;")
        self.status_bar.addPermanentWidget(self.range_label)

    # Controller -> display

    def render_snapshot(self, snapshot: ViewerSnapshot):
        """Show a controller snapshot and request its image."""
        self.prev_btn.setEnabled(snapshot.prev_available)
        self.next_btn.setEnabled(snapshot.next_available)

        self.dt_input.blockSignals(True)
        self.dt_input.setDateTime(to_qdatetime(snapshot.current))
        self.dt_input.blockSignals(False)

        index = self.channel_combo.findData(snapshot.channel)
        if index >= 0 and index != self.channel_combo.currentIndex():
            self.channel_combo.blockSignals(True)
            self.channel_combo.setCurrentIndex(index)
            self.channel_combo.blockSignals(False)

        channel = get_channel_by_id(snapshot.channel) or {}
        self.image_panel.show_snapshot(
            get_display_name(snapshot.channel),
            channel.get('description', ''),
            snapshot.current,
            snapshot.image_path
        )
        self.path_label.setText(snapshot.image_path)
        self.status_indicator.set_loading()

        if self.client is not None:
            self.client.request(snapshot.image_path)

    # Display -> controller

    def _on_datetime_changed(self, value: QDateTime):
        self.controller.set_time(value.toString(QT_TIMESTAMP_FORMAT))

    def _on_channel_changed(self, index: int):
        channel_id = self.channel_combo.itemData(index)
        if channel_id is not None:
            self.controller.set_channel(channel_id)

    @pyqtSlot(str, bytes)
    def on_image_received(self, image_path: str, data: bytes):
        """Handle image data from the client."""
        if image_path != self.controller.snapshot.image_path:
            return  # stale result for a snapshot no longer shown

        if self.image_panel.update_image(data):
            self.status_indicator.set_loaded()
            self.controller.report_load_success()
        else:
            self.on_load_failed(image_path, "Undecodable image")

    @pyqtSlot(str, str)
    def on_load_failed(self, image_path: str, error_msg: str):
        """Handle a failed image load."""
        if image_path != self.controller.snapshot.image_path:
            return

        self.image_panel.set_error(error_msg)
        self.status_indicator.set_error()
        self.controller.report_load_failure()

    def set_client(self, client: ArchiveImageClient):
        """Connect to an image client and load the current snapshot."""
        self.client = client

        client.image_received.connect(self.on_image_received)
        client.load_failed.connect(self.on_load_failed)

        client.request(self.controller.snapshot.image_path)

    def _show_about(self):
        """Show about dialog."""
        about_text = """
<h2>Sun Viewer</h2>
<p>Version 1.0.0</p>

<p>Hourly solar images from the archive, from 2010-05-19 to the latest published hour.</p>

<h3>Channels:</h3>
<ul>
<li><b>SDO/AIA</b> - 94, 131, 171, 193, 211, 304, 335 Angstrom and the 211+193+171 composite</li>
<li><b>SDO/HMI</b> - Magnetogram</li>
<li><b>SOHO/LASCO</b> - Coronagraph</li>
</ul>

<p>Use the Left/Right arrow keys to step one hour back or forward.</p>

<p>Solar images are courtesy of NASA/SDO and the AIA, EVE, and HMI science teams.</p>
"""
        QMessageBox.about(self, "About Sun Viewer", about_text)

    def closeEvent(self, event):
        """Handle window close."""
        self.controller.unsubscribe(self.render_snapshot)
        if self.client is not None:
            self.client.stop()
        event.accept()
