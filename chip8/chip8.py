# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908


import random
from functools import wraps

from chip8.config import (
    DEBUG, FONT_SPRITE_SIZE, FONT_START_ADDRESS, INSTRUCTION_SIZE, ROM_START_ADDRESS,
)
from chip8.keypad import Keypad
from chip8.memory import Memory
from chip8.opcode import OpForm, decode
from chip8.registers import (
    FLAG, AddressRegister, DataRegisters, ProgramCounter, Stack, Timer,
)
from chip8.screen import Screen


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to print out the ASM of the instruction being called"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(*args, **kwargs):
            mem_addr = args[0].current_address    # args[0] equals self of the decorated method
            vals = fn(*args, **kwargs)              # use the locals() values of each decorated function in the print
            vals['mem_addr'] = mem_addr
            if DEBUG: print(msg.format(**vals))
        return wrapper_fn
    return decorator


def default_beep():
    print("BEEP!")


# these forms set the program counter themselves, every other one is advanced by one instruction
SELF_ADVANCING = {OpForm.RETURN, OpForm.JUMP, OpForm.CALL, OpForm.JUMP_PLUS_V0}


# ******************** CPU SECTION
class Chip8:
    """
    the virtual machine, sole owner of memory, registers, stack, timers, screen and keypad

    collaborators are injected:
        renderer    callable receiving the Screen after every cycle that drew on it
        key_source  object with poll_for_key() used by the blocking wait-key instruction
        rng         random.Random-like object used by the rand instruction
        beep        callable invoked when the sound timer is about to expire
    """
    def __init__(self, renderer=None, key_source=None, rng=None, beep=default_beep):
        self.mem = Memory()
        self.stack = Stack()
        self.v_regs = DataRegisters()
        self.pc = ProgramCounter()
        self.idx = AddressRegister()    # specify where the sprites reside in memory
        self.dt = Timer()               # delay timer, active when non-zero
        self.st = Timer()               # sound timer, active when non-zero
        self.screen = Screen()
        self.keypad = Keypad(key_source)
        self.dirty = False
        self.running = False
        self.current_address = ROM_START_ADDRESS
        self.renderer = renderer
        self.rng = rng if rng is not None else random.Random()
        self.beep = beep
        self.instructions = {
            OpForm.CALL_MACHINE_ROUTINE: self._call_machine_routine,
            OpForm.CLEAR_SCREEN: self._clear_screen,
            OpForm.RETURN: self._return,
            OpForm.JUMP: self._jump,
            OpForm.CALL: self._call_addr,
            OpForm.SKIP_EQ_IMM: self._skip_if_eq,
            OpForm.SKIP_NE_IMM: self._skip_if_not_eq,
            OpForm.SKIP_EQ_REG: self._skip_if_eq_regs,
            OpForm.SET_IMM: self._set_vk,
            OpForm.ADD_IMM: self._add_to_vk,
            OpForm.SET_REG: self._set_vx_to_vy,
            OpForm.OR: self._set_vx_or_vy,
            OpForm.AND: self._set_vx_and_vy,
            OpForm.XOR: self._set_vx_xor_vy,
            OpForm.ADD_REG: self._add_vx_vy,
            OpForm.SUB_REG: self._sub_vx_vy,
            OpForm.SHR: self._shr,
            OpForm.SUBN_REG: self._subn_vx_vy,
            OpForm.SHL: self._shl,
            OpForm.SKIP_NE_REG: self._skip_if_not_eq_regs,
            OpForm.SET_ADDRESS: self._set_idx,
            OpForm.JUMP_PLUS_V0: self._jump_plus,
            OpForm.RAND: self._random_byte_and,
            OpForm.DRAW: self._to_screen,
            OpForm.SKIP_IF_PRESSED: self._skip_if_pressed,
            OpForm.SKIP_IF_NOT_PRESSED: self._skip_if_not_pressed,
            OpForm.READ_DELAY: self._set_vx_dt,
            OpForm.WAIT_KEY: self._wait_keypress,
            OpForm.SET_DELAY: self._set_dt_vx,
            OpForm.SET_SOUND: self._set_st,
            OpForm.ADD_TO_ADDRESS: self._add_to_idx,
            OpForm.FONT_ADDRESS: self._select_char,
            OpForm.STORE_BCD: self._bcd_repr,
            OpForm.STORE_REGS: self._store_vregs,
            OpForm.LOAD_REGS: self._load_vregs,
        }

    def __str__(self):
        registers = f"PC_REGISTER:{self.pc} | IDX_REGISTER:{self.idx} | VARIABLE_REGISTERS:{self.v_regs}"
        stack = f"STACK:{self.stack}"
        timers = f"DELAY_TIMER:{self.dt} | SOUND_TIMER:{self.st}"
        flags = f"DRAW: {self.dirty} | KEYPAD: {self.keypad}"
        return f"{registers}\n{stack}\n{timers}\n{flags}"

    def initialize(self):
        """point PC at the start of the program area and load the font glyphs"""
        self.pc.write(ROM_START_ADDRESS)
        self.mem.load_fonts()

    def load_program(self, path):
        """load a program image from disk, an unreadable path leaves the machine runnable but empty"""
        return self.mem.load_rom(path)

    def load_bytes(self, rom):
        self.mem.load_bytes(bytes(rom))

    # ******************** HOST INPUT
    def key_down(self, identifier):
        return self.keypad.press(identifier)

    def key_up(self, identifier):
        return self.keypad.release(identifier)

    # ******************** INSTRUCTIONS
    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SYS 0x{address:03x}")
    def _call_machine_routine(self, op):
        """legacy call to a native routine, nothing to do"""
        address = op.nnn
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKP V{x:X}")
    def _skip_if_pressed(self, op):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        x = op.x
        key = self.v_regs[x] & 0xF
        if self.keypad.is_pressed(key):
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SKNP V{x:X}")
    def _skip_if_not_pressed(self, op):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        x = op.x
        key = self.v_regs[x] & 0xF
        if not self.keypad.is_pressed(key):
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, K")
    def _wait_keypress(self, op):
        """wait for a key press and store its value in Vx, the whole machine is halted meanwhile"""
        x = op.x
        self.v_regs[x] = self.keypad.read() & 0xF
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, DT")
    def _set_vx_dt(self, op):
        """set Vx = DT (delay timer) value"""
        x = op.x
        self.v_regs[x] = self.dt.value
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD DT, V{x:X}")
    def _set_dt_vx(self, op):
        """set DT (delay timer) = Vx"""
        x = op.x
        self.dt.reset(self.v_regs[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CLS")
    def _clear_screen(self, op):
        self.screen.clear()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RET")
    def _return(self, op):
        """return from a subroutine, resuming after the call that pushed the address"""
        address = self.stack.pop()
        self.pc.write(address)
        self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP 0x{address:03x}")
    def _jump(self, op):
        address = op.nnn
        self.pc.write(address)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: CALL 0x{address:03x}")
    def _call_addr(self, op):
        address = op.nnn
        self.stack.push(self.pc.read())
        self.pc.write(address)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x:X}, {comparison_value}")
    def _skip_if_eq(self, op):
        x, comparison_value = op.x, op.nn
        if self.v_regs[x] == comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x:X}, {comparison_value}")
    def _skip_if_not_eq(self, op):
        x, comparison_value = op.x, op.nn
        if self.v_regs[x] != comparison_value:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, op):
        x, y = op.x, op.y
        if self.v_regs[x] == self.v_regs[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, op):
        x, y = op.x, op.y
        if self.v_regs[x] != self.v_regs[y]:
            self._goto_next_instruction()
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, {value}")
    def _set_vk(self, op):
        """set the value of one of the 16 variable registers, Vx"""
        x, value = op.x, op.nn
        self.v_regs[x] = value
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x:X}, {value}")
    def _add_to_vk(self, op):
        """add to the value already present in one of the variable registers, VF untouched"""
        x, value = op.x, op.nn
        self.v_regs[x] = (self.v_regs[x] + value) & 0xFF    # keep only the lowest 8 bits from the result and store them in Vx
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, op):
        """set the value of Vx equal to that of Vy"""
        x, y = op.x, op.y
        self.v_regs[x] = self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, op):
        x, y = op.x, op.y
        self.v_regs[x] = self.v_regs[x] | self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, op):
        x, y = op.x, op.y
        self.v_regs[x] = self.v_regs[x] & self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, op):
        x, y = op.x, op.y
        self.v_regs[x] = self.v_regs[x] ^ self.v_regs[y]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, op):
        """set the value of Vx to Vx + Vy, VF = carry"""
        x, y = op.x, op.y
        total = self.v_regs[x] + self.v_regs[y]
        self.v_regs[FLAG] = 1 if total > 0xFF else 0
        self.v_regs[x] = total & 0xFF   # keep only the lowest 8 bits from the result and store them in Vx
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, op):
        """set the value of Vx to Vx - Vy, VF = NOT borrow"""
        x, y = op.x, op.y
        vx, vy = self.v_regs[x], self.v_regs[y]
        self.v_regs[FLAG] = 1 if vx >= vy else 0
        self.v_regs[x] = (vx - vy) & 0xFF
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHR V{x:X}")
    def _shr(self, op):
        """set Vx equal to Vx SHR 1, VF = the bit shifted out"""
        x = op.x
        vx = self.v_regs[x]
        self.v_regs[FLAG] = vx & 0x1
        self.v_regs[x] = vx >> 1
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, op):
        """set the value of Vx to Vy - Vx, VF = NOT borrow"""
        x, y = op.x, op.y
        vx, vy = self.v_regs[x], self.v_regs[y]
        self.v_regs[FLAG] = 1 if vy >= vx else 0
        self.v_regs[x] = (vy - vx) & 0xFF
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: SHL V{x:X}")
    def _shl(self, op):
        """set Vx equal to Vx SHL 1, VF = the bit shifted out"""
        x = op.x
        vx = self.v_regs[x]
        self.v_regs[FLAG] = (vx >> 7) & 0x1
        self.v_regs[x] = (vx << 1) & 0xFF   # multiply by 2 and keep only the lowest 8 bits from the result
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD I, 0x{value:03x}")
    def _set_idx(self, op):
        """set the value of the I register"""
        value = op.nnn
        self.idx.write(value)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: JP V0, 0x{address:03x}")
    def _jump_plus(self, op):
        address = op.nnn
        self.pc.write(address + self.v_regs[0x0])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: RND V{x:X}, 0x{kk:02x}")
    def _random_byte_and(self, op):
        x, kk = op.x, op.nn
        rnd = self.rng.randint(0, 255)
        self.v_regs[x] = rnd & kk
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD ST, V{x:X}")
    def _set_st(self, op):
        """set ST = Vx"""
        x = op.x
        self.st.reset(self.v_regs[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: ADD I, V{x:X}")
    def _add_to_idx(self, op):
        """set I = I + Vx, VF untouched"""
        x = op.x
        self.idx.write(self.idx.read() + self.v_regs[x])
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD F, V{x:X}")
    def _select_char(self, op):
        """set I to location of sprite for digit Vx"""
        x = op.x
        digit = self.v_regs[x] & 0xF
        self.idx.write(FONT_START_ADDRESS + digit * FONT_SPRITE_SIZE)
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD B, V{x:X}")
    def _bcd_repr(self, op):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        x = op.x
        value = self.v_regs[x]
        hundreds, tens, ones = value // 100, (value // 10) % 10, value % 10
        i = self.idx.read()
        self.mem[i], self.mem[i+1], self.mem[i+2] = hundreds, tens, ones
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD [I], V{x:X}")
    def _store_vregs(self, op):
        """store registers V0 through Vx (included) in memory starting at location I, I unchanged"""
        x = op.x
        i = self.idx.read()
        for reg in range(x + 1):
            self.mem[i + reg] = self.v_regs[reg]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: LD V{x:X}, [I]")
    def _load_vregs(self, op):
        """read registers V0 through Vx (included) from memory starting at location I, I unchanged"""
        x = op.x
        i = self.idx.read()
        for reg in range(x + 1):
            self.v_regs[reg] = self.mem[i + reg]
        return locals()

    @asm("mem_addr: 0x{mem_addr:04x}    instruction: DRW V{x:X}, V{y:X}, {n_bytes}")
    def _to_screen(self, op):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y, n_bytes = op.x, op.y, op.n
        # the origin wraps around the screen, whatever falls past the edges is clipped
        x_origin = self.v_regs[x] % self.screen.w
        y_origin = self.v_regs[y] % self.screen.h
        self.v_regs[FLAG] = 0
        # step through each sprite byte
        for row in range(n_bytes):
            y_coordinate = y_origin + row
            if y_coordinate >= self.screen.h:
                break
            sprite_byte = self.mem[self.idx.read() + row]
            for col in range(8):
                x_coordinate = x_origin + col
                if x_coordinate >= self.screen.w:
                    break
                if sprite_byte & (0x80 >> col):
                    # sprites are XORed onto the existing screen and if this
                    # causes any pixel to be erased then VF=1, otherwise VF=0
                    if self.screen.flip_pixel(x_coordinate, y_coordinate):
                        self.v_regs[FLAG] = 1
        self.dirty = True
        return locals()

    def _goto_next_instruction(self):
        self.pc.step(INSTRUCTION_SIZE)

    # ******************** CYCLE
    def fetch(self):
        """each instruction is two bytes long, stored big-endian"""
        return self.mem.read_word(self.pc.read())

    def execute(self, op):
        self.current_address = self.pc.read()
        if op.form not in SELF_ADVANCING:
            self._goto_next_instruction()
        self.instructions[op.form](op)

    def tick_timers(self):
        if self.dt:
            self.dt.tick()
        if self.st:
            if self.st.value == 1 and self.beep is not None:
                self.beep()
            self.st.tick()

    def cycle(self):
        """emulate one machine cycle: fetch, decode, execute, update timers, hand the screen over if needed"""
        self.dirty = False
        op = decode(self.fetch())
        self.execute(op)
        self.tick_timers()
        if self.dirty and self.renderer is not None:
            self.renderer(self.screen)
            self.dirty = False
        return op

    def run(self, cycles=None):
        """run a bounded number of cycles, or until stop() when cycles is None"""
        self.running = True
        count = 0
        while self.running and (cycles is None or count < cycles):
            self.cycle()
            count += 1
        self.running = False
        return count

    def stop(self):
        self.running = False
