import sys
from pathlib import Path
import logging as lg

import click

import piglet.runtime.vm as vm


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def execute(bytecode: bytes) -> vm.Interpretation:
    lg.info(f'Executing {len(bytecode)} byte(s)')
    return vm.interpret(bytecode)


def report(res: vm.Interpretation) -> int:
    if not res.ok:
        click.echo(f'Runtime error: {res.outcome.message}', err=True)
        return EXIT_RUNTIME_ERROR

    click.echo(f'Result value: {res.result}')
    return EXIT_SUCCESS


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Trace every executed instruction')
@click.argument('bytecode_filename', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(verbose: bool, bytecode_filename: Path):
    ''' Execute a bytecode file and print its result '''
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)
    lg.info(f'PIGLET RUN {bytecode_filename}')

    bytecode = bytecode_filename.read_bytes()
    sys.exit(report(execute(bytecode)))


if __name__ == '__main__':
    run()
