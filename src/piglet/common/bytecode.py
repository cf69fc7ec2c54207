''' Instruction encoding shared by the assembler, disassembler and VM '''

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from piglet.common.vmconf import IMM_BITS, IMM_MASK, IMM_MIN, IMM_MAX, WORD_MASK
import piglet.common.ops as ops


class TruncatedInstruction(ops.PigletError):
    pass


@dataclass(frozen=True)
class Instruction:
    offset: int
    info: ops.OpInfo
    args: Tuple[int, ...]   # raw unsigned bytes

    @property
    def size(self) -> int:
        return 1 + len(self.args)

    def __str__(self):
        return ' '.join([self.info.name] + [str(a) for a in self.args])


def to_imm_byte(value: int) -> int:
    if not IMM_MIN <= value <= IMM_MAX:
        raise ValueError(f'Immediate {value} is out of range [{IMM_MIN}, {IMM_MAX}]')

    return value & IMM_MASK


def sign_extend(byte: int) -> int:
    ''' Signed 8-bit immediate into the unsigned word domain '''
    value = byte & IMM_MASK

    if value & (1 << (IMM_BITS - 1)):
        value -= 1 << IMM_BITS

    return value & WORD_MASK


def encode_instruction(code: int, args: Sequence[int] = ()) -> bytes:
    info = ops.lookup_code(code)

    if len(args) != info.num_args:
        raise ValueError(f'{info.name} takes {info.num_args} argument(s), got {len(args)}')

    return bytes([info.code] + [to_imm_byte(a) for a in args])


def decode_instruction(buffer: bytes, offset: int = 0) -> Instruction:
    info = ops.lookup_code(buffer[offset])
    end = offset + 1 + info.num_args

    if end > len(buffer):
        raise TruncatedInstruction(
            f'Truncated {info.name} at offset {offset}: '
            f'need {1 + info.num_args} bytes, have {len(buffer) - offset}'
        )

    return Instruction(offset, info, tuple(buffer[offset + 1:end]))


def iter_instructions(buffer: bytes) -> Iterator[Instruction]:
    ''' Walks instructions until the end of the buffer or the first ABORT '''
    offset = 0

    while offset < len(buffer):
        instr = decode_instruction(buffer, offset)

        if instr.info.code == ops.ABORT:
            return

        yield instr
        offset += instr.size
