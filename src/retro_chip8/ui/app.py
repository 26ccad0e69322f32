# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
設定とROMを読み込み、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.common.errors import LoadError
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import MachineConfig
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to a raw CHIP-8 program")
    parser.add_argument("-c", "--config", help="YAML machine configuration")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
    machine = SystemBuilder().build_machine(config)
    try:
        machine.load_file(args.rom)
    except LoadError as e:
        logger.error("%s", e)
        return 1

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(machine, config)
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
