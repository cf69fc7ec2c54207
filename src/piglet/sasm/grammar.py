# type: ignore
''' Line grammar: one instruction or a full-line comment '''

import pyparsing as pp

from piglet.sasm.fpp import FPP


comment = pp.Suppress(pp.Regex('#.*'))

mnemonic = pp.Word(pp.printables)
argument = pp.Word(pp.printables)

statement = (mnemonic + pp.Group(pp.ZeroOrMore(argument))) \
    .set_parse_action(lambda r: (FPP.on_statement, r.as_list()))

line = pp.Optional(comment | statement)
