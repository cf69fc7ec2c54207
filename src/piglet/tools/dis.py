import sys
from pathlib import Path
import logging as lg
from typing import List

import click

import piglet.common.ops as ops
from piglet.common.bytecode import iter_instructions


EXIT_DISASSEMBLY_ERROR = 1


class DisassemblyError(ops.PigletError):
    pass


def disassemble_lines(bytecode: bytes) -> List[str]:
    '''
    One "NAME arg..." line per instruction, arguments as raw unsigned bytes.

    Stops at the end of the buffer or at the first ABORT, which is not
    listed. Comments and blank lines of the source are gone for good.
    '''
    try:
        return [str(instr) for instr in iter_instructions(bytecode)]
    except ops.PigletError as e:
        raise DisassemblyError(str(e)) from e


def disassemble(bytecode: bytes) -> str:
    return ''.join(f'{line}\n' for line in disassemble_lines(bytecode))


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('bytecode_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def dis(verbose: bool, bytecode_filename: Path):
    ''' Print a bytecode file as mnemonic text '''
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)
    lg.info(f'Disassembling {bytecode_filename}')

    try:
        text = disassemble(bytecode_filename.read_bytes())
    except DisassemblyError as e:
        click.echo(f'{bytecode_filename}: {e}', err=True)
        sys.exit(EXIT_DISASSEMBLY_ERROR)

    click.echo(text, nl=False)


if __name__ == '__main__':
    dis()
