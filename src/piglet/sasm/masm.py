import sys
from pathlib import Path
import logging as lg
from typing import Iterator

import click

from piglet.sasm.asm import assemble, AssemblyError


EXIT_ASSEMBLY_ERROR = 1


def read_lines(filepath: Path) -> Iterator[str]:
    for lineno, raw in enumerate(filepath.read_bytes().splitlines(), start=1):
        try:
            yield raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise AssemblyError(f'Invalid UTF-8 in source: {e.reason}', lineno, repr(raw)) from e


def compile_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.info(f'Assembling file {filepath}')
    return assemble(read_lines(filepath))


def write_binary(bytecode: bytes, binary: Path):
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytecode)
    lg.info(f'Wrote {len(bytecode)} byte(s) to {binary}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('binary', type=click.Path(dir_okay=False, path_type=Path))
def asm(verbose: bool, source: Path, binary: Path):
    ''' Assemble a source file into bytecode '''
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)

    try:
        bytecode = compile_file(source)
    except (AssemblyError, OSError) as e:
        click.echo(f'{source}: {e}', err=True)
        sys.exit(EXIT_ASSEMBLY_ERROR)

    try:
        write_binary(bytecode, binary)
    except OSError as e:
        click.echo(f'{binary}: {e}', err=True)
        sys.exit(EXIT_ASSEMBLY_ERROR)


if __name__ == '__main__':
    asm()
