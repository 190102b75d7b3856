import unittest

from chip8.errors import UnknownOpcodeError
from chip8.opcode import OpForm, OpKind, decode


class TestDecode(unittest.TestCase):
    def test_every_form_has_its_template(self):
        self.assertEqual(len(OpForm), 35)
        samples = {
            0x0123: OpForm.CALL_MACHINE_ROUTINE,
            0x00E0: OpForm.CLEAR_SCREEN,
            0x00EE: OpForm.RETURN,
            0x1ABC: OpForm.JUMP,
            0x2ABC: OpForm.CALL,
            0x3A12: OpForm.SKIP_EQ_IMM,
            0x4A12: OpForm.SKIP_NE_IMM,
            0x5AB0: OpForm.SKIP_EQ_REG,
            0x5AB1: OpForm.SKIP_EQ_REG,
            0x6A05: OpForm.SET_IMM,
            0x7A05: OpForm.ADD_IMM,
            0x8AB0: OpForm.SET_REG,
            0x8AB1: OpForm.OR,
            0x8AB2: OpForm.AND,
            0x8AB3: OpForm.XOR,
            0x8AB4: OpForm.ADD_REG,
            0x8AB5: OpForm.SUB_REG,
            0x8AB6: OpForm.SHR,
            0x8AB7: OpForm.SUBN_REG,
            0x8ABE: OpForm.SHL,
            0x9AB0: OpForm.SKIP_NE_REG,
            0xA123: OpForm.SET_ADDRESS,
            0xB123: OpForm.JUMP_PLUS_V0,
            0xCA12: OpForm.RAND,
            0xDAB5: OpForm.DRAW,
            0xEA9E: OpForm.SKIP_IF_PRESSED,
            0xEAA1: OpForm.SKIP_IF_NOT_PRESSED,
            0xFA07: OpForm.READ_DELAY,
            0xFA0A: OpForm.WAIT_KEY,
            0xFA15: OpForm.SET_DELAY,
            0xFA18: OpForm.SET_SOUND,
            0xFA1E: OpForm.ADD_TO_ADDRESS,
            0xFA29: OpForm.FONT_ADDRESS,
            0xFA33: OpForm.STORE_BCD,
            0xFA55: OpForm.STORE_REGS,
            0xFA65: OpForm.LOAD_REGS,
        }
        for word, form in samples.items():
            self.assertIs(decode(word).form, form, hex(word))
        self.assertEqual(set(samples.values()), set(OpForm))

    def test_operand_fields(self):
        op = decode(0xDAB5)
        self.assertEqual((op.x, op.y, op.n, op.nn, op.nnn),
                         (0xA, 0xB, 0x5, 0xB5, 0xAB5))
        self.assertIs(op.kind, OpKind.DISPLAY)

    def test_kinds(self):
        self.assertIs(decode(0xFA33).kind, OpKind.BCD)
        self.assertIs(decode(0xFA18).kind, OpKind.SOUND)
        self.assertIs(decode(0x0123).kind, OpKind.CALL)
        self.assertIs(decode(0x00EE).kind, OpKind.FLOW)

    def test_unknown(self):
        for word in (0x8AB8, 0x9AB1, 0xE000, 0xF000, 0xFFFF):
            with self.assertRaises(UnknownOpcodeError) as ctx:
                decode(word)
            self.assertEqual(ctx.exception.value, word)

    def test_failure_count(self):
        # 13647 unknown words in [0x0000, 0xFFFE], 0xFFFF makes one more
        failures = 0
        for word in range(0xFFFF):
            try:
                decode(word)
            except UnknownOpcodeError:
                failures += 1
        self.assertEqual(failures, 13647)

    def test_decoding_is_deterministic(self):
        self.assertEqual(decode(0x6A05), decode(0x6A05))
        self.assertIs(decode(0x6A05).form, decode(0x6A05).form)

    def test_word_out_of_range(self):
        with self.assertRaises(ValueError):
            decode(0x10000)


if __name__ == "__main__":
    unittest.main()
