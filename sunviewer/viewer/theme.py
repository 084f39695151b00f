"""
Dark Theme for the Sun Viewer

Fusion style with a near-black palette so the solar images stand out.
"""

from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QPalette, QColor

Role = QPalette.ColorRole

BACKGROUND = "#353535"
SURFACE = "#191919"
PANEL = "#2a2a2a"
BORDER = "#3a3a3a"
TEXT = "#ffffff"
MUTED = "#7f7f7f"
ACCENT = "#f0a030"  # solar orange

ACTIVE_COLORS = {
    Role.Window: BACKGROUND,
    Role.WindowText: TEXT,
    Role.Base: SURFACE,
    Role.AlternateBase: BACKGROUND,
    Role.ToolTipBase: PANEL,
    Role.ToolTipText: TEXT,
    Role.Text: TEXT,
    Role.PlaceholderText: MUTED,
    Role.Button: BACKGROUND,
    Role.ButtonText: TEXT,
    Role.Highlight: ACCENT,
    Role.HighlightedText: "#000000",
}

# prev/next at the bounds
DISABLED_COLORS = {
    Role.WindowText: MUTED,
    Role.Text: MUTED,
    Role.ButtonText: MUTED,
}

STYLE_SHEET = f"""
    QToolTip {{
        background-color: {PANEL};
        color: {TEXT};
        border: 1px solid #555555;
        padding: 4px;
        border-radius: 4px;
    }}
    QStatusBar {{
        background-color: {PANEL};
        border-top: 1px solid {BORDER};
    }}
    QDateTimeEdit, QComboBox {{
        background-color: {BACKGROUND};
        color: {TEXT};
        border: 1px solid {BORDER};
        border-radius: 4px;
        padding: 4px 8px;
    }}
    QDateTimeEdit:focus, QComboBox:hover {{
        border-color: {ACCENT};
    }}
"""


def apply_dark_theme(app: QApplication):
    """
    Apply the dark palette and style sheet.

    Args:
        app: QApplication instance
    """
    app.setStyle("Fusion")

    palette = QPalette()
    for role, color in ACTIVE_COLORS.items():
        palette.setColor(role, QColor(color))
    for role, color in DISABLED_COLORS.items():
        palette.setColor(QPalette.ColorGroup.Disabled, role, QColor(color))

    app.setPalette(palette)
    app.setStyleSheet(STYLE_SHEET)
