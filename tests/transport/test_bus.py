# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest
from retro_chip8.transport.bus import Bus, RAM, ROM, BusAccessType

# @intent:test_suite 共通バスとメモリデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(ram.read(a) == 0 for a in range(16))

    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(IndexError, match="Offset 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(IndexError, match="Offset -1 out of bounds for RAM of size 4."):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="does not fit in a byte"):
            ram.write(0, 0x100)

    def test_ram_clear(self):
        ram = RAM(4)
        ram.write(2, 0xAB)
        ram.clear()
        assert ram.read(2) == 0

class TestROM:
    # @intent:test_case_rom 通常の書き込みは無視され、load_data でのみ内容を設定できることを検証します。
    def test_rom_ignores_write(self):
        rom = ROM(4)
        rom.load_data(0, 0xF0)
        rom.write(0, 0x12)
        assert rom.read(0) == 0xF0

class TestBus:
    @pytest.fixture
    def bus(self):
        bus = Bus()
        rom = ROM(0x10)
        bus.register_device(0x0000, 0x000F, rom)
        bus.register_device(0x0010, 0x00FF, RAM(0xF0))
        return bus

    def test_register_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError, match="does not match"):
            bus.register_device(0x0000, 0x00FF, RAM(16))

    def test_register_invalid_range(self):
        with pytest.raises(ValueError):
            Bus().register_device(0x10, 0x00, RAM(1))

    def test_register_non_device(self):
        with pytest.raises(TypeError):
            Bus().register_device(0x00, 0x0F, bytearray(16))

    def test_unmapped_address(self, bus):
        with pytest.raises(IndexError, match="not mapped"):
            bus.read(0x0100)

    # @intent:test_case_log 読み書きがログに記録され、peek と load は記録されないことを検証します。
    def test_activity_log(self, bus):
        bus.write(0x0020, 0x55)
        assert bus.read(0x0020) == 0x55
        bus.peek(0x0020)
        bus.load(0x0021, 0x66)
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x0020, 0x55, BusAccessType.WRITE),
            (0x0020, 0x55, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    def test_rom_region_through_bus(self, bus):
        bus.load(0x0003, 0x90)
        bus.write(0x0003, 0x00)
        assert bus.peek(0x0003) == 0x90
        # 無視された書き込みもアクセスとしては記録される
        log = bus.get_and_clear_activity_log()
        assert log[0].access_type == BusAccessType.WRITE

    def test_clear(self, bus):
        bus.load(0x0001, 0x11)
        bus.write(0x0030, 0x22)
        bus.clear()
        assert bus.peek(0x0001) == 0
        assert bus.peek(0x0030) == 0
        assert bus.get_and_clear_activity_log() == []
