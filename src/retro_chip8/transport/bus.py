# retro_chip8/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8 の 4KB アドレス空間を、フォント用ROMとプログラム/作業用RAMの
2つの領域に分けて管理します。命令実行による読み書きは全て記録され、
1サイクル分のアクセス履歴として Snapshot に渡されます。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple

class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:data_structure 1回のバスアクセス (アドレス、8bit値、種別) の記録。生成後は変更されません。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType

# @intent:responsibility バス上に配置できるデバイスのインターフェース。
# @intent:pre-condition read/write に渡されるアドレスは、デバイス先頭からのオフセットです。
class Device(ABC):
    @abstractmethod
    def read(self, address: int) -> int:
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass

    # @intent:responsibility リセット時に内容をゼロへ戻します。
    @abstractmethod
    def clear(self) -> None:
        pass

# @intent:responsibility 固定長のバイト配列として振る舞う読み書き可能なメモリ。
class RAM(Device):
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._size = size
        self._cells = bytearray(size)

    def _check_offset(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Offset {address} out of bounds for {type(self).__name__} of size {self._size}.")

    def read(self, address: int) -> int:
        self._check_offset(address)
        return self._cells[address]

    # @intent:pre-condition data は 0〜0xFF の範囲であること。
    def write(self, address: int, data: int) -> None:
        self._check_offset(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Value {data} does not fit in a byte.")
        self._cells[address] = data

    def clear(self) -> None:
        self._cells[:] = bytes(self._size)

    def get_size(self) -> int:
        return self._size

# @intent:responsibility フォントグリフを保持する読み込み専用メモリ。
# @intent:rationale プログラムからの書き込みは例外にせず無視し、内容の設定は load_data からのみ行います。
class ROM(RAM):
    def write(self, address: int, data: int) -> None:
        self._check_offset(address)

    def load_data(self, address: int, data: int) -> None:
        super().write(address, data)

class _Region(NamedTuple):
    start: int
    end: int  # 終端アドレスを含む
    device: Device

# @intent:responsibility アドレスを担当デバイスとオフセットに解決し、命令実行によるアクセスを記録します。
class Bus:
    """
    アクセス経路は3種類あります。

    - read / write: 命令実行用。アクセス履歴に記録されます。
    - peek: 逆アセンブラやUI向けの参照用。記録されません。
    - load: リセット時のフォント配置とプログラム配置用。ROMにも書き込め、記録されません。
    """
    def __init__(self):
        self._regions: List[_Region] = []
        self._activity: List[BusAccess] = []

    # @intent:pre-condition 0 <= start_address <= end_address であり、RAM/ROM はサイズが範囲長と一致すること。
    # @intent:rationale 領域の重複は検査しません。配置は Chip8Machine が決めます。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not 0 <= start_address <= end_address:
            raise ValueError(f"Invalid address range {start_address:#x}-{end_address:#x}.")
        if not isinstance(device, Device):
            raise TypeError(f"{type(device).__name__} is not a Device.")
        span = end_address - start_address + 1
        if isinstance(device, RAM) and device.get_size() != span:
            raise ValueError(
                f"{type(device).__name__} of {device.get_size()} bytes does not match "
                f"the {span}-byte range {start_address:#05x}-{end_address:#05x}."
            )
        self._regions.append(_Region(start_address, end_address, device))

    def _resolve(self, address: int) -> _Region:
        for region in self._regions:
            if region.start <= address <= region.end:
                return region
        raise IndexError(f"Address {address:#06x} not mapped to any device.")

    def read(self, address: int) -> int:
        region = self._resolve(address)
        data = region.device.read(address - region.start)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:responsibility 命令実行による書き込み。ROM領域では値は捨てられますが、アクセスは記録されます。
    def write(self, address: int, data: int) -> None:
        region = self._resolve(address)
        region.device.write(address - region.start, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    def peek(self, address: int) -> int:
        region = self._resolve(address)
        return region.device.read(address - region.start)

    def load(self, address: int, data: int) -> None:
        region = self._resolve(address)
        if isinstance(region.device, ROM):
            region.device.load_data(address - region.start, data)
        else:
            region.device.write(address - region.start, data)

    def clear(self) -> None:
        for region in self._regions:
            region.device.clear()
        self._activity = []

    # @intent:responsibility 前回の取得以降に記録されたアクセスを返し、履歴を空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity
