import unittest
from retro_chip8.arch.chip8.machine import Chip8Machine, RunState
from retro_chip8.arch.chip8.state import KeyWaitState
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError, MachineHaltedError

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.machine = Chip8Machine()

    def _load_words(self, *words):
        self.machine.load(b"".join(w.to_bytes(2, "big") for w in words))
        self.state = self.machine.state

    def _poke_word(self, address, word):
        self.machine.bus.load(address, word >> 8)
        self.machine.bus.load(address + 1, word & 0xFF)

    def test_jp(self):
        self._load_words(0x1ABC)
        self.machine.step()
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_and_ret(self):
        self._load_words(0x2300)
        self._poke_word(0x300, 0x00EE)
        self.machine.step()
        self.assertEqual(self.state.pc, 0x300)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[0], 0x202)

        self.machine.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_se_sne_imm(self):
        self._load_words(0x6142, 0x3142, 0x0000, 0x3143, 0x4142, 0x4143)
        self.machine.step()
        self.machine.step() # SE V1, 0x42 -> skip
        self.assertEqual(self.state.pc, 0x206)
        self.machine.step() # SE V1, 0x43 -> no skip
        self.assertEqual(self.state.pc, 0x208)
        self.machine.step() # SNE V1, 0x42 -> no skip
        self.assertEqual(self.state.pc, 0x20A)
        self.machine.step() # SNE V1, 0x43 -> skip
        self.assertEqual(self.state.pc, 0x20E)

    def test_se_sne_reg(self):
        self._load_words(0x5120)
        self.state.v[1] = self.state.v[2] = 0x10
        self.machine.step()
        self.assertEqual(self.state.pc, 0x204)

        self._load_words(0x9120)
        self.state.v[1] = 0x10
        self.machine.step()
        self.assertEqual(self.state.pc, 0x204)

        self._load_words(0x9120)
        self.machine.step()
        self.assertEqual(self.state.pc, 0x202)

    def test_jp_v0(self):
        self._load_words(0xB300)
        self.state.v[0] = 0x10
        self.machine.step()
        self.assertEqual(self.state.pc, 0x310)

    def test_skp_sknp(self):
        self._load_words(0xE19E, 0x0000, 0xE1A1)
        self.state.v[1] = 0xA
        self.machine.set_key(0xA, True)
        self.machine.step() # SKP -> skip
        self.assertEqual(self.state.pc, 0x204)
        self.machine.step() # SKNP -> no skip
        self.assertEqual(self.state.pc, 0x206)

        self._load_words(0xE1A1)
        self.state.v[1] = 0xA
        self.machine.step()
        self.assertEqual(self.state.pc, 0x204)

    # @intent:test_case 13回目の入れ子呼び出しで StackOverflowError が発生し、マシンが HALTED になることを検証します。
    def test_stack_overflow(self):
        self._load_words(0x2200) # CALL 0x200 (自分自身)
        for _ in range(12):
            self.machine.step()
        self.assertEqual(self.state.sp, 12)

        with self.assertRaises(StackOverflowError) as ctx:
            self.machine.step()
        self.assertEqual(ctx.exception.address, 0x200)
        self.assertEqual(self.machine.run_state, RunState.HALTED)
        self.assertIs(self.machine.fault, ctx.exception)
        self.assertEqual(self.state.pc, 0x200)
        self.assertEqual(self.state.sp, 12)

        with self.assertRaises(MachineHaltedError):
            self.machine.step()

    def test_stack_underflow(self):
        self._load_words(0x00EE)
        with self.assertRaises(StackUnderflowError):
            self.machine.step()
        self.assertEqual(self.machine.run_state, RunState.HALTED)
        self.assertEqual(self.state.pc, 0x200)

    def test_reset_clears_halt(self):
        self._load_words(0x00EE)
        with self.assertRaises(StackUnderflowError):
            self.machine.step()
        self.machine.reset()
        self.assertEqual(self.machine.run_state, RunState.RUNNING)
        self.assertIsNone(self.machine.fault)

    # @intent:test_case FX0A がキーの押下と解放を観測するまで待機し、その間は1ステップずつ消費することを検証します。
    def test_wait_for_key(self):
        self._load_words(0xF30A, 0x6001)
        self.machine.step()
        self.assertEqual(self.state.key_wait, KeyWaitState.AWAITING_PRESS)
        self.assertEqual(self.state.pc, 0x202)

        self.machine.step() # 押下なし
        self.assertEqual(self.state.key_wait, KeyWaitState.AWAITING_PRESS)

        self.machine.set_key(5, True)
        self.machine.step()
        self.assertEqual(self.state.key_wait, KeyWaitState.AWAITING_RELEASE)
        self.assertEqual(self.state.v[3], 0)

        self.machine.step() # 押下継続
        self.assertEqual(self.state.key_wait, KeyWaitState.AWAITING_RELEASE)
        self.assertEqual(self.state.v[0], 0)

        self.machine.set_key(5, False)
        snapshot = self.machine.step()
        self.assertEqual(self.state.key_wait, KeyWaitState.IDLE)
        self.assertEqual(self.state.v[3], 5)
        self.assertEqual(snapshot.operation.opcode_hex, "F30A")
        self.assertEqual(self.state.v[0], 0)

        self.machine.step() # 次の命令 (LD V0, 0x01)
        self.assertEqual(self.state.v[0], 1)
        self.assertEqual(self.state.pc, 0x204)

    def test_wait_for_key_already_pressed(self):
        self._load_words(0xF30A)
        self.machine.set_key(7, True)
        self.machine.step()
        self.assertEqual(self.state.key_wait, KeyWaitState.AWAITING_RELEASE)
        self.machine.set_key(7, False)
        self.machine.step()
        self.assertEqual(self.state.v[3], 7)
        self.assertEqual(self.state.key_wait, KeyWaitState.IDLE)

    def test_unassigned_and_sys_are_noops(self):
        self._load_words(0x5121, 0x0123, 0xFFFF)
        before = self.state.copy()
        for expected_pc in (0x202, 0x204, 0x206):
            self.machine.step()
            self.assertEqual(self.state.pc, expected_pc)
        self.assertEqual(self.state.v, before.v)
        self.assertEqual(self.state.i, before.i)

if __name__ == '__main__':
    unittest.main()
