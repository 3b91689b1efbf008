# themes.py

from dataclasses import dataclass
from PyQt5.QtGui import QPalette, QColor


@dataclass
class Theme:
    name: str
    window_bg: str
    panel_bg: str
    text: str
    muted_text: str
    accent: str
    selection: str   # highlighted film in the list
    sold_out: str    # list text for sold out films
    danger: str


LIGHT = Theme(
    name="light",
    window_bg="#f3f4f6",
    panel_bg="#ffffff",
    text="#111827",
    muted_text="#6b7280",
    accent="#2563eb",
    selection="#ddeeff",
    sold_out="#9ca3af",
    danger="#dc2626",
)

DARK = Theme(
    name="dark",
    window_bg="#020617",
    panel_bg="#030712",
    text="#e5e7eb",
    muted_text="#9ca3af",
    accent="#38bdf8",
    selection="#0f2942",
    sold_out="#4b5563",
    danger="#ef4444",
)

NIGHT = Theme(
    name="night",
    window_bg="#000000",
    panel_bg="#020617",
    text="#e5e7eb",
    muted_text="#9ca3af",
    accent="#f97316",
    selection="#2a1606",
    sold_out="#4b5563",
    danger="#f87171",
)

THEMES = {
    "light": LIGHT,
    "dark": DARK,
    "night": NIGHT,
}


def apply_theme_to_palette(theme: Theme, palette: QPalette) -> None:
    palette.setColor(QPalette.Window, QColor(theme.window_bg))
    palette.setColor(QPalette.Base, QColor(theme.panel_bg))
    palette.setColor(QPalette.AlternateBase, QColor(theme.panel_bg))
    palette.setColor(QPalette.Button, QColor(theme.panel_bg))
    palette.setColor(QPalette.Highlight, QColor(theme.selection))
    palette.setColor(QPalette.HighlightedText, QColor(theme.text))
    for role in (QPalette.Text, QPalette.WindowText, QPalette.ButtonText):
        palette.setColor(role, QColor(theme.text))


def stylesheet(theme: Theme) -> str:
    return f"""
    QMainWindow {{
        background-color: {theme.window_bg};
    }}

    QGroupBox {{
        border: 1px solid {theme.muted_text};
        border-radius: 14px;
        margin-top: 10px;
        background-color: {theme.panel_bg};
    }}

    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 14px;
        padding: 0 6px;
        color: {theme.muted_text};
        font-size: 11px;
    }}

    QLabel {{
        color: {theme.text};
    }}

    QLineEdit, QListWidget {{
        background-color: {theme.panel_bg};
        color: {theme.text};
        border: 1px solid {theme.muted_text};
        border-radius: 10px;
        padding: 6px 9px;
    }}

    QListWidget::item:selected {{
        background-color: {theme.selection};
        color: {theme.text};
    }}

    QPushButton {{
        background-color: {theme.accent};
        color: white;
        border-radius: 999px;
        padding: 6px 14px;
        border: none;
        font-size: 11px;
    }}

    QPushButton:disabled {{
        background-color: {theme.sold_out};
        color: {theme.panel_bg};
    }}

    QPushButton#dangerButton {{
        background-color: {theme.danger};
        padding: 2px 10px;
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {theme.text};
        border: 1px solid {theme.muted_text};
    }}

    QLabel#notification {{
        background-color: {theme.selection};
        border-radius: 8px;
        padding: 6px 10px;
    }}

    QLabel#notification[level="error"] {{
        color: {theme.danger};
    }}
    """
