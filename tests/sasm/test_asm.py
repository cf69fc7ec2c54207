import pytest

from piglet.common.ops import PUSHI, ADD, SUB, DIV, MUL, POP_RES, DONE
from piglet.common.vmconf import MAX_CODE_LEN
from piglet.runtime.vm import interpret
from piglet.sasm.asm import assemble, assemble_text, AssemblyError

from unit_utils import code, assemble_program


def test_basic():
    lines = ['PUSHI 5', 'PUSHI 3', 'SUB', 'POP_RES', 'DONE']
    assert assemble(lines) == code(PUSHI, 5, PUSHI, 3, SUB, POP_RES, DONE)


def test_comments_and_blank_lines():
    source = '''
# a comment
PUSHI 1

   # indented comment

DONE
'''
    assert assemble_text(source) == code(PUSHI, 1, DONE)


def test_case_insensitive():
    assert assemble(['pushi 1', 'Pop_Res', 'dOnE']) == code(PUSHI, 1, POP_RES, DONE)


def test_whitespace_separators():
    assert assemble(['  PUSHI\t7  \n']) == code(PUSHI, 7)


@pytest.mark.parametrize('literal, byte', [
    ('0', 0x00),
    ('127', 0x7F),
    ('-1', 0xFF),
    ('-128', 0x80),
    ('+3', 0x03),
    ('0x1f', 0x1F),
    ('-0x10', 0xF0),
    ('0o17', 0x0F),
    ('0b101', 0x05),
    ('255', 0xFF),
    ('05', 0x05),
    ('010', 0x08),
    ('-010', 0xF8),
    ('0X7f', 0x7F),
])
def test_argument_literals(literal, byte):
    assert assemble([f'PUSHI {literal}']) == bytes([PUSHI, byte])


def test_unknown_mnemonic():
    with pytest.raises(AssemblyError) as e:
        assemble(['PUSHI 1', 'FOO'])

    assert e.value.lineno == 2
    assert e.value.line == 'FOO'
    assert 'Unknown operation name: FOO' in str(e.value)


def test_abort_mnemonic_assembles():
    assert assemble(['abort']) == code(0)


def test_not_enough_arguments():
    with pytest.raises(AssemblyError) as e:
        assemble(['PUSHI'])

    assert e.value.message == 'Not enough arguments supplied: PUSHI'


def test_too_many_arguments():
    with pytest.raises(AssemblyError) as e:
        assemble(['PUSHI 1 2'])

    assert e.value.message == 'Too many arguments supplied: PUSHI 1 2'

    with pytest.raises(AssemblyError, match='Too many arguments'):
        assemble(['ADD 1'])


def test_trailing_comment_is_an_argument():
    with pytest.raises(AssemblyError, match='Too many arguments'):
        assemble(['DONE # bye'])


@pytest.mark.parametrize('literal', ['abc', '256', '-129', '1.5', '08', '0x', '5x', '1_0'])
def test_invalid_argument(literal):
    with pytest.raises(AssemblyError) as e:
        assemble([f'PUSHI {literal}'])

    assert e.value.message == f'Invalid argument supplied: {literal}'


def test_unparseable_line():
    with pytest.raises(AssemblyError, match='Cannot parse string'):
        assemble(['PUSHI é'])


def test_error_on_last_line_gives_no_output():
    lines = ['PUSHI 1', 'POP_RES', 'DONE', 'NOPE']
    result = None

    with pytest.raises(AssemblyError):
        result = assemble(lines)

    assert result is None


def test_program_too_long():
    assert len(assemble(['DONE'] * MAX_CODE_LEN)) == MAX_CODE_LEN

    with pytest.raises(AssemblyError, match='Program too long'):
        assemble(['DONE'] * (MAX_CODE_LEN + 1))


def test_empty_source():
    assert assemble([]) == b''


def test_assemble_then_interpret_matches_hand_built():
    source = ['PUSHI 9', 'PUSHI 3', 'DIV', 'PUSHI 4', 'MUL', 'PUSHI -2', 'ADD', 'POP_RES', 'DONE']
    by_hand = code(PUSHI, 9, PUSHI, 3, DIV, PUSHI, 4, MUL, PUSHI, -2, ADD, POP_RES, DONE)

    assert assemble(source) == by_hand
    assert interpret(assemble(source)) == interpret(by_hand)
    assert interpret(by_hand).result == 10


def test_file_with_comments():
    assert assemble_program('expr') == code(
        PUSHI, 2, PUSHI, 3, ADD, PUSHI, 4, MUL,
        PUSHI, 6, PUSHI, 2, DIV, SUB, POP_RES, DONE,
    )


def test_error_is_reported_with_line_number():
    with pytest.raises(AssemblyError) as e:
        assemble_program('toomany')

    assert str(e.value) == 'Too many arguments supplied: PUSHI 2 3 (line 2)'
