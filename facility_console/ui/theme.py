from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

from facility_console.config import Settings

COL = {
    "bg": "#F4F6F8",
    "surface": "#FFFFFF",
    "surface2": "#F9FAFB",
    "border": "#D9DEE4",
    "text": "#2E3338",
    "text_primary": "#1F2429",
    "text_muted": "#6B7280",
    "muted": "#7A8088",
    "accent": "#9CC7F0",
    "accent2": "#7DB3E8",
    "accent_border": "#4F8FCC",
    "accent_pressed": "#6AA3DA",
    "link": "#3B7DC4",
    "success_bg": "#E6F6EA",
    "success": "#5FB573",
    "warn_bg": "#FFF4DB",
    "warn": "#E0B44C",
    "error_bg": "#FDE7E5",
    "error": "#D0645E",
    "info_bg": "#EEF1F4",
    "info": "#6B7280",
}


def apply_theme(app: QApplication, settings: Settings) -> None:
    app.setStyle("Fusion")
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(COL["bg"]))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(COL["text"]))
    palette.setColor(QPalette.ColorRole.Base, QColor(COL["surface"]))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(COL["surface2"]))
    palette.setColor(QPalette.ColorRole.Text, QColor(COL["text"]))
    palette.setColor(QPalette.ColorRole.Button, QColor(COL["surface"]))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(COL["text"]))
    palette.setColor(QPalette.ColorRole.Link, QColor(COL["link"]))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(COL["accent2"]))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(COL["text_primary"]))
    app.setPalette(palette)
    app.setStyleSheet(_build_qss(settings))


def _build_qss(settings: Settings) -> str:
    compact = settings.ui_density == "compact"
    font_size = 11 if compact else 12
    control_py = "5px 8px" if compact else "7px 10px"
    button_py = "5px 10px" if compact else "6px 10px"
    return f"""
    * {{
        color: {COL["text_primary"]};
        font-size: {font_size}px;
    }}
    QGroupBox {{
        border: 1px solid {COL["border"]};
        border-radius: 8px;
        margin-top: 8px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 4px;
        font-weight: 700;
    }}
    QLabel#pageTitle {{
        font-size: 20px;
        font-weight: 800;
    }}
    QLabel#muted {{
        color: {COL["text_muted"]};
    }}
    QLabel#statusLabel {{
        background: transparent;
        border: none;
        border-radius: 6px;
        padding: 0;
    }}
    QLabel#statusLabel[statusLevel="info"] {{
        color: {COL["info"]};
        background: {COL["info_bg"]};
        padding: 6px 10px;
    }}
    QLabel#statusLabel[statusLevel="success"] {{
        background: {COL["success_bg"]};
        border: 1px solid {COL["success"]};
        padding: 6px 10px;
    }}
    QLabel#statusLabel[statusLevel="warning"] {{
        background: {COL["warn_bg"]};
        border: 1px solid {COL["warn"]};
        padding: 6px 10px;
    }}
    QLabel#statusLabel[statusLevel="error"] {{
        color: {COL["error"]};
        background: {COL["error_bg"]};
        border: 1px solid {COL["error"]};
        padding: 6px 10px;
    }}
    QLineEdit, QComboBox, QListWidget {{
        background: {COL["surface"]};
        border: 1px solid {COL["border"]};
        border-radius: 6px;
        padding: {control_py};
        selection-background-color: {COL["accent2"]};
    }}
    QLineEdit:focus, QComboBox:focus {{
        border: 1px solid {COL["accent_border"]};
    }}
    QPushButton {{
        background: {COL["surface"]};
        border: 1px solid {COL["border"]};
        border-radius: 6px;
        padding: {button_py};
        min-height: 26px;
    }}
    QPushButton#primaryButton {{
        background: {COL["accent2"]};
        border-color: {COL["accent_border"]};
        font-weight: 700;
    }}
    QPushButton#primaryButton:pressed {{
        background: {COL["accent_pressed"]};
    }}
    QPushButton#secondaryButton {{
        color: {COL["muted"]};
    }}
    QPushButton:checked {{
        background: {COL["accent"]};
        border-color: {COL["accent_border"]};
    }}
    QPushButton:disabled {{
        color: {COL["muted"]};
        background: {COL["surface2"]};
    }}
    QWidget#toast {{
        border-radius: 10px;
    }}
    QWidget#toast[toastLevel="success"] {{
        background: {COL["success_bg"]};
        border: 1px solid {COL["success"]};
    }}
    QWidget#toast[toastLevel="warning"] {{
        background: {COL["warn_bg"]};
        border: 1px solid {COL["warn"]};
    }}
    QWidget#toast[toastLevel="error"] {{
        background: {COL["error_bg"]};
        border: 1px solid {COL["error"]};
    }}
    QWidget#toast[toastLevel="info"] {{
        background: {COL["info_bg"]};
        border: 1px solid {COL["border"]};
    }}
    QWidget#toast QLabel {{
        background: transparent;
        color: {COL["text"]};
    }}
    QLabel#toastDetails {{
        color: {COL["text_muted"]};
    }}
    """
