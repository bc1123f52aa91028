"""
Lock Timeline entry point.

Usage:
    lock-timeline [trace.json] [--config FILE] [--debug]
"""

import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from lock_timeline.timeline_model import TimelineModel
from lock_timeline.timeline_window import TimelineWindow
from lock_timeline.utils.timeline_config import TimelineConfig


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='lock-timeline',
        description='Interactive timeline of lock-protocol events.'
    )
    parser.add_argument('trace', nargs='?', help='JSON trace file to open on startup')
    parser.add_argument('--config', help='JSON configuration file with a "timeline" section')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = QApplication(sys.argv[:1])

    model = TimelineModel(config=TimelineConfig(args.config))
    window = TimelineWindow(model)
    window.show()

    if args.trace:
        window.load_trace(args.trace)

    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
