import logging as lg
import re
from typing import List, Any

from piglet.common.bytecode import encode_instruction, to_imm_byte
from piglet.common.vmconf import MAX_CODE_LEN
import piglet.common.ops as ops

Tokens = List[Any]

# C %i forms plus Python 0o/0b prefixes
INT_LITERAL = re.compile(r'([+-]?)(0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|0[0-7]*|[1-9][0-9]*)')


def parse_int(token: str) -> int:
    match = INT_LITERAL.fullmatch(token)

    if match is None:
        raise ValueError(f'Not an integer literal: {token}')

    sign, digits = match.groups()

    if digits[:2].lower() in ('0x', '0o', '0b'):
        value = int(digits, 0)
    elif digits.startswith('0'):
        value = int(digits, 8)     # leading zero is octal, as in C
    else:
        value = int(digits)

    return -value if sign == '-' else value


class AssemblyError(ops.PigletError):
    def __init__(self, message: str, lineno: int, line: str):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.line = line

    def __str__(self):
        return f'{self.message} (line {self.lineno})'


class FPP:
    ''' First pass processor '''
    bytecode: bytearray

    def __init__(self):
        self.bytecode = bytearray()
        self.lineno = 0
        self.line = ''

    def begin_line(self, lineno: int, line: str):
        self.lineno = lineno
        self.line = line.strip()

    def fail(self, message: str):
        raise AssemblyError(message, self.lineno, self.line)

    # Handlers
    def issue_op(self, info: ops.OpInfo, args: List[int]):
        lg.debug(f'Issuing command {info.name} (0x{info.code:02X}) @ 0x{len(self.bytecode):X}')
        self.bytecode += encode_instruction(info.code, args)

    def on_imm(self, token: str) -> int:
        try:
            value = parse_int(token)
            to_imm_byte(value)
        except ValueError:
            self.fail(f'Invalid argument supplied: {token}')

        return value

    def on_statement(self, tokens: Tokens):
        name, args = tokens

        try:
            info = ops.lookup_name(name)
        except ops.UnknownMnemonic as e:
            self.fail(str(e))

        if len(args) < info.num_args:
            self.fail(f'Not enough arguments supplied: {self.line}')

        if len(args) > info.num_args:
            self.fail(f'Too many arguments supplied: {self.line}')

        self.issue_op(info, [self.on_imm(arg) for arg in args])

        if len(self.bytecode) > MAX_CODE_LEN:
            self.fail(f'Program too long: more than {MAX_CODE_LEN} bytes')

    def on_fail(self, rest: str):
        self.fail(f'Cannot parse string: {rest}')
