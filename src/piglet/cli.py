import click

from piglet.runtime.runner import run
from piglet.sasm.masm import asm
from piglet.tools.dis import dis


@click.group()
def cli():
    ''' PigletVM: a tiny stack-based bytecode machine '''


cli.add_command(dis)
cli.add_command(run)
cli.add_command(asm)


if __name__ == '__main__':
    cli()
