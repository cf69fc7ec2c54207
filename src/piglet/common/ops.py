from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class PigletError(Exception):
    pass


class UnknownMnemonic(PigletError):
    pass


class UnknownOpcode(PigletError):
    pass


ABORT = 0x00    # end of stream
PUSHI = 0x01    # S8 -> [SP++]
ADD = 0x02      # a + b
SUB = 0x03      # a - b
DIV = 0x04      # a // b
MUL = 0x05      # a * b
POP_RES = 0x06  # [--SP] -> RES
DONE = 0x07     # halt


@dataclass(frozen=True)
class OpInfo:
    code: int
    name: str
    num_args: int


OPCODES: Mapping[int, OpInfo] = MappingProxyType({
    info.code: info for info in [
        OpInfo(ABORT, 'ABORT', 0),
        OpInfo(PUSHI, 'PUSHI', 1),
        OpInfo(ADD, 'ADD', 0),
        OpInfo(SUB, 'SUB', 0),
        OpInfo(DIV, 'DIV', 0),
        OpInfo(MUL, 'MUL', 0),
        OpInfo(POP_RES, 'POP_RES', 0),
        OpInfo(DONE, 'DONE', 0),
    ]
})


def lookup_code(code: int) -> OpInfo:
    info = OPCODES.get(code)

    if info is None:
        raise UnknownOpcode(f'Unknown opcode 0x{code:02X}')

    return info


def lookup_name(name: str) -> OpInfo:
    ''' Case-insensitive scan over the opcode table '''
    for info in OPCODES.values():
        if info.name.lower() == name.lower():
            return info

    raise UnknownMnemonic(f'Unknown operation name: {name}')
