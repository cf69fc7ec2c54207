import logging as lg
from typing import Iterable

import pyparsing as pp

from piglet.sasm.fpp import FPP, AssemblyError
import piglet.sasm.grammar as grammar


def assemble(source_lines: Iterable[str]) -> bytes:
    fpp = FPP()

    for lineno, text in enumerate(source_lines, start=1):
        fpp.begin_line(lineno, text)

        try:
            actions = grammar.line.parse_string(text, parse_all=True)
        except pp.ParseBaseException:
            fpp.on_fail(text.strip())

        for (func, arg) in actions:
            func(fpp, arg)

    lg.debug(f'Assembled {len(fpp.bytecode)} byte(s)')
    return bytes(fpp.bytecode)


def assemble_text(source: str) -> bytes:
    return assemble(source.splitlines())
