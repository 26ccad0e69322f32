import logging

from retro_chip8.arch.chip8.machine import Chip8Machine
from .models import MachineConfig

logger = logging.getLogger(__name__)

# @intent:responsibility 設定（Config）に基づいて Chip8Machine を生成します。
class SystemBuilder:
    def build_machine(self, config: MachineConfig) -> Chip8Machine:
        if (config.display.width, config.display.height) != (64, 32):
            logger.warning("Non-standard display size %dx%d; most ROMs assume 64x32",
                           config.display.width, config.display.height)

        machine = Chip8Machine(
            width=config.display.width,
            height=config.display.height,
            quirks=config.quirks,
            seed=config.seed,
            clock_hz=config.clock_hz,
        )
        logger.debug("Built machine: clock %d Hz (%d steps/frame), quirks %s",
                     machine.clock_hz, machine.steps_per_frame, config.quirks)
        return machine
