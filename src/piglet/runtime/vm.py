import logging as lg
from enum import IntEnum
from typing import Callable, NamedTuple, Optional

import piglet.common.ops as ops
from piglet.common.bytecode import sign_extend
from piglet.common.vmconf import WORD_MASK, RESULT_DEFAULT


class Outcome(IntEnum):
    SUCCESS = 0
    ERROR_DIVISION_BY_ZERO = 1
    ERROR_UNKNOWN_OPCODE = 2
    ERROR_END_OF_STREAM = 3
    ERROR_STACK_UNDERFLOW = 4

    @property
    def message(self) -> str:
        return MESSAGES[self]


MESSAGES = {
    Outcome.SUCCESS: 'success',
    Outcome.ERROR_DIVISION_BY_ZERO: 'division by zero',
    Outcome.ERROR_UNKNOWN_OPCODE: 'unknown opcode',
    Outcome.ERROR_END_OF_STREAM: 'end of stream',
    Outcome.ERROR_STACK_UNDERFLOW: 'stack underflow',
}


class Halt(Exception):
    outcome = Outcome.SUCCESS


class Done(Halt):
    pass


class VMError(Halt):
    pass


class DivisionByZero(VMError):
    outcome = Outcome.ERROR_DIVISION_BY_ZERO


class InvalidOpcode(VMError):
    outcome = Outcome.ERROR_UNKNOWN_OPCODE


class EndOfStream(VMError):
    outcome = Outcome.ERROR_END_OF_STREAM


class StackUnderflow(VMError):
    outcome = Outcome.ERROR_STACK_UNDERFLOW


class Interpretation(NamedTuple):
    outcome: Outcome
    result: Optional[int]   # set on SUCCESS only

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS


class VM():
    pc: int             # Program counter
    stack: list[int]    # Operand stack, top is the last item
    result: int         # Result register

    def __init__(self, bytecode: bytes):
        self.bytecode = bytes(bytecode)     # Read-only, may be shared

        self.pc = 0
        self.stack = []
        self.result = RESULT_DEFAULT

    # - Helpers - #

    def debug_dump(self):
        cells = ' '.join(f'{v:X}' for v in self.stack)
        lg.debug(f'PC:{self.pc:X} RES:{self.result:X} STACK:[{cells}]')

    def next_byte(self) -> int:
        if self.pc >= len(self.bytecode):
            raise EndOfStream(f'Ran past the end of bytecode at offset {self.pc}')

        byte = self.bytecode[self.pc]
        self.pc += 1
        return byte

    def next_signed(self) -> int:
        return sign_extend(self.next_byte())

    def require(self, depth: int):
        if len(self.stack) < depth:
            raise StackUnderflow(
                f'Need {depth} stack element(s), have {len(self.stack)} at offset {self.pc - 1}'
            )

    def do_push(self, val: int):
        self.stack.append(val & WORD_MASK)

    def do_pop(self) -> int:
        return self.stack.pop()

    def arithm_pair(self, op: Callable[[int, int], int]):
        self.require(2)
        b = self.do_pop()   # pushed last
        a = self.do_pop()
        self.do_push(op(a, b))

    # - Operations - #

    def abort(self):
        raise EndOfStream(f'ABORT at offset {self.pc - 1}')

    def pushi(self):
        self.do_push(self.next_signed())

    def add(self):
        self.arithm_pair(lambda a, b: a + b)

    def sub(self):
        self.arithm_pair(lambda a, b: a - b)

    def mul(self):
        self.arithm_pair(lambda a, b: a * b)

    def div(self):
        self.require(2)
        b = self.do_pop()
        a = self.do_pop()

        if b == 0:
            raise DivisionByZero(f'DIV {a} by zero at offset {self.pc - 1}')

        self.do_push(a // b)

    def pop_res(self):
        self.require(1)
        self.result = self.do_pop()

    def done(self):
        raise Done()

    HANDLERS = {
        ops.ABORT: abort,
        ops.PUSHI: pushi,
        ops.ADD: add,
        ops.SUB: sub,
        ops.DIV: div,
        ops.MUL: mul,
        ops.POP_RES: pop_res,
        ops.DONE: done,
    }

    # -- Implementation -- #

    def exec_next(self):
        addr = self.pc
        op = self.next_byte()
        handler = self.HANDLERS.get(op)

        if handler is None:
            raise InvalidOpcode(f'Unknown opcode 0x{op:02X} at offset {addr}')

        lg.debug(f'{addr:04X}: {ops.OPCODES[op].name}')
        handler(self)
        self.debug_dump()

    def run(self) -> Interpretation:
        try:
            while True:
                self.exec_next()

        except Done:
            lg.debug(f'Done with result {self.result}')
            return Interpretation(Outcome.SUCCESS, self.result)

        except VMError as e:
            lg.debug(f'Halted on {e.outcome.name}: {e}')
            return Interpretation(e.outcome, None)


def interpret(bytecode: bytes) -> Interpretation:
    return VM(bytecode).run()
