# type: ignore
import pytest
from click.testing import CliRunner

import unit_utils


@pytest.fixture
def runner():
    yield CliRunner()


@pytest.fixture
def program_binary(tmp_path):
    ''' Assembles a program from testdata into a file under tmp_path '''
    def build(name: str):
        binary = tmp_path / f'{name}.bin'
        binary.write_bytes(unit_utils.assemble_program(name))
        return binary

    yield build
