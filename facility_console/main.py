from __future__ import annotations

import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from PySide6.QtCore import QtMsgType, qInstallMessageHandler
from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox

from facility_console.application.dto.auth_dto import SessionContext
from facility_console.application.errors import SessionRequiredError
from facility_console.config import LOG_DIR, Settings, settings
from facility_console.container import build_container
from facility_console.ui.main_window import MainWindow
from facility_console.ui.theme import apply_theme
from facility_console.ui.widgets.notifications import show_error


def _setup_logging() -> Path:
    log_path = LOG_DIR / "app.log"
    handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    return log_path


def _install_exception_hook(log_path: Path) -> None:
    def _handle_exception(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).error("Unhandled exception", exc_info=(exc_type, exc, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None,
                "Error",
                f"An unexpected error occurred.\nLog: {log_path}",
            )
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _handle_exception


def _install_qt_message_handler() -> None:
    last_msg: dict[str, float] = {}
    suppress_prefixes = (
        "QPainter::begin: A paint device can only be painted by one painter at a time.",
        "QPainter::translate: Painter not active",
    )

    def _handle_qt_message(msg_type: QtMsgType, _context, message: str) -> None:
        now = time.monotonic()
        if message.startswith(suppress_prefixes):
            last_time = last_msg.get(message)
            if last_time and now - last_time < 2.0:
                return
            last_msg[message] = now
        logger = logging.getLogger("qt")
        if msg_type == QtMsgType.QtCriticalMsg:
            logger.error("Qt: %s", message)
        elif msg_type == QtMsgType.QtWarningMsg:
            logger.warning("Qt: %s", message)
        else:
            logger.info("Qt: %s", message)

    qInstallMessageHandler(_handle_qt_message)


def build_session(config: Settings) -> SessionContext:
    """Session from the configured login, role and token."""
    try:
        return SessionContext(login=config.user_login, role=config.user_role, access_token=config.api_token)
    except PydanticValidationError as exc:
        raise SessionRequiredError("No access token configured. Set FACILITY_CONSOLE_API_TOKEN and restart.") from exc


def main() -> int:
    log_path = _setup_logging()
    _install_exception_hook(log_path)
    _install_qt_message_handler()
    app = QApplication(sys.argv)
    apply_theme(app, settings)

    try:
        session = build_session(settings)
    except SessionRequiredError as exc:
        show_error(None, str(exc), title="Sign-in required")
        return 1

    logging.getLogger(__name__).info("Starting session for %s (%s)", session.login, session.role)
    container = build_container(settings, session)
    window = MainWindow(container)
    _apply_initial_window_size(window, app)
    window.show()
    return app.exec()


def _apply_initial_window_size(window: QMainWindow, app: QApplication) -> None:
    screen = window.screen() or app.primaryScreen()
    if not screen:
        return
    available = screen.availableGeometry()
    width = max(900, int(available.width() * 0.8))
    height = max(700, int(available.height() * 0.85))
    window.resize(width, height)
    x = available.x() + max(0, (available.width() - width) // 2)
    y = available.y() + max(0, (available.height() - height) // 2)
    window.move(x, y)


if __name__ == "__main__":
    raise SystemExit(main())
