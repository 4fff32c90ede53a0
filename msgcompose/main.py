"""Entry point for the msgcompose demo chat window.

Usage:
    python -m msgcompose.main              # open the demo window
    python -m msgcompose.main --debug      # with debug logging
    python -m msgcompose.main --no-capitalize
"""
import sys
import signal
import logging
import argparse


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


STYLESHEET = """
ChatEdit[correction="true"] { background-color: #fff4d6; }
"""


def build_window(config):
    """Transcript on top, composer below. Returns (window, chat_edit)."""
    from PyQt5.QtWidgets import QWidget, QVBoxLayout, QTextBrowser
    from msgcompose.chat_edit import ChatEdit

    window = QWidget()
    window.setWindowTitle("msgcompose")
    window.resize(480, 360)
    layout = QVBoxLayout(window)

    transcript = QTextBrowser(window)
    layout.addWidget(transcript, 1)

    edit = ChatEdit(config, parent=window)
    edit.setStyleSheet(STYLESHEET)
    layout.addWidget(edit)

    edit.messageSent.connect(transcript.append)
    edit.setFocus()
    return window, edit


def run(args):
    from PyQt5.QtWidgets import QApplication
    from msgcompose.config import Config

    app = QApplication(sys.argv)
    app.setApplicationName("msgcompose")

    config = Config(args.config) if args.config else Config()
    setup_logging(args.debug or config.debug_logging)
    logger = logging.getLogger(__name__)

    if args.no_capitalize:
        config.auto_capitalize = False
    logger.info("Config: %s (auto-capitalize %s, history %d)",
                config.path, config.auto_capitalize, config.max_message_history)

    window, edit = build_window(config)
    window.show()

    exit_code = app.exec_()
    edit.dispose()
    return exit_code


def main():
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    parser = argparse.ArgumentParser(description="msgcompose demo chat window")
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-capitalize", action="store_true",
                        help="Turn auto-capitalization off (saved to config)")
    args = parser.parse_args()

    sys.exit(run(args))


if __name__ == "__main__":
    main()
