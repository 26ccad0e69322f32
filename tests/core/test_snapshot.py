# tests/core/test_snapshot.py
"""
retro_chip8.core.snapshotモジュールおよびAbstractCpu.stepが生成するSnapshotの単体テスト。
"""
import pytest
from retro_chip8.core.snapshot import (
    BusAccessType,
    BusAccess,
    Operation,
    Metadata,
    Snapshot,
)
from retro_chip8.arch.chip8.machine import Chip8Machine

# @intent:test_suite CPUとバスの状態を記録する不変スナップショットデータ構造の検証。

class TestSnapshotTypes:
    # @intent:test_case_immutability BusAccessが不変であることを検証します。
    def test_bus_access_immutability(self):
        access = BusAccess(address=0x200, data=0xAA, access_type=BusAccessType.READ)
        with pytest.raises(AttributeError):
            access.address = 0x300

    def test_operation_defaults(self):
        op = Operation(opcode_hex="00E0", mnemonic="CLS")
        assert op.operands == []
        assert op.length == 2
        assert op.cycle_count == 1

    def test_metadata(self):
        meta = Metadata(cycle_count=3, symbol_info="0x0200: CLS")
        assert meta.cycle_count == 3
        assert meta.symbol_info == "0x0200: CLS"

class TestStepSnapshot:
    @pytest.fixture
    def machine(self):
        machine = Chip8Machine()
        machine.load(bytes([0x61, 0x05, 0x71, 0x01]))
        return machine

    # @intent:test_case フェッチによる2バイトの読み込みがバスアクティビティとして記録されることを検証します。
    def test_fetch_is_logged(self, machine):
        snapshot = machine.step()
        assert isinstance(snapshot, Snapshot)
        assert snapshot.bus_activity == [
            BusAccess(0x200, 0x61, BusAccessType.READ),
            BusAccess(0x201, 0x05, BusAccessType.READ),
        ]

    # @intent:test_case Snapshotが保持する状態は、以降の実行で変化しない独立したコピーであることを検証します。
    def test_state_is_independent_copy(self, machine):
        first = machine.step()
        machine.step()
        assert first.state.v[1] == 5
        assert first.state.pc == 0x202
        assert machine.state.v[1] == 6
        assert first.state is not machine.state

    def test_cycle_count_accumulates(self, machine):
        machine.step()
        second = machine.step()
        assert second.metadata.cycle_count == 2
        assert second.metadata.symbol_info == "0x0202: ADD V1, 0x01"
