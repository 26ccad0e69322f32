import yaml
from typing import Dict, Any
from retro_chip8.arch.chip8.instructions import Quirks
from .models import MachineConfig, DisplayConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        # Parse Display
        display_data = self._section(data, "display")
        defaults = DisplayConfig()
        display = DisplayConfig(
            width=self._parse_int(display_data.get("width", defaults.width)),
            height=self._parse_int(display_data.get("height", defaults.height)),
            scale=self._parse_int(display_data.get("scale", defaults.scale)),
            foreground=self._parse_int(display_data.get("foreground", defaults.foreground)),
            background=self._parse_int(display_data.get("background", defaults.background)),
        )
        if display.scale <= 0:
            raise ValueError(f"Invalid display scale: {display.scale}")
        for name in ("foreground", "background"):
            if not 0 <= getattr(display, name) <= 0xFFFFFFFF:
                raise ValueError(f"Invalid {name} colour: {getattr(display, name):#x}")

        # Parse Quirks
        quirks_data = self._section(data, "quirks")
        quirks = Quirks(
            shift_uses_vy=self._parse_bool(quirks_data.get("shift_uses_vy", True)),
            load_store_increments_i=self._parse_bool(quirks_data.get("load_store_increments_i", True)),
        )

        # Parse CPU
        cpu_data = self._section(data, "cpu")
        clock_hz = self._parse_int(cpu_data.get("clock_hz", MachineConfig.clock_hz))
        if clock_hz <= 0:
            raise ValueError(f"Invalid clock_hz: {clock_hz}")
        seed = cpu_data.get("seed")
        if seed is not None:
            seed = self._parse_int(seed)

        # Parse Keymap (ホストキー名 -> キーパッド番号)
        keymap_data = data.get("keymap")
        if keymap_data is not None and not isinstance(keymap_data, dict):
            raise ValueError(f"Invalid keymap section: {keymap_data!r}")
        keymap = dict(DEFAULT_KEYMAP)
        if keymap_data is not None:
            keymap = {}
            for host_key, index in keymap_data.items():
                index = self._parse_int(index)
                if not 0 <= index <= 0xF:
                    raise ValueError(f"Invalid keypad index {index} for key '{host_key}'")
                keymap[str(host_key).upper()] = index

        return MachineConfig(
            display=display,
            quirks=quirks,
            clock_hz=clock_hz,
            seed=seed,
            keymap=keymap,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    # 値のないセクション (例: "quirks:" のみ) は None として読まれるため、空として扱う
    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Invalid {name} section: {section!r}")
        return section

    def _parse_bool(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"Invalid boolean format: {value!r}")
        return value
