"""
Shared token tables for the turtle command language.

Exports:
    - TOKEN_PATTERN: regular expression used by the lexer to find candidate tokens
    - token_hashmap: exact-match keyword table (source text -> token type)
    - OPENERS / CLOSERS: block pairing used by the parser's matching stack
    - ALIASABLE_KEYWORDS: keywords that user aliases may target
    - SAMPLE_PROGRAM: program parsed by the CLI when no source is given
"""

import re

# Longest-leftmost candidates: words (optionally :sigiled), digit runs,
# brackets and comparison operators.
TOKEN_PATTERN = re.compile(r":*[a-zA-Z0-9]+|[0-9]+|\[|\]|(<=|<|>=|>|==|!=|!)")

token_hashmap: dict[str, str] = {
    "forward": "FORWARD",
    "back": "BACK",
    "right": "RIGHT",
    "left": "LEFT",
    "repeat": "REPEAT",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "to": "TO",
    "end": "END",
    "if": "IF",
    ">": "GREATER",
    "<": "LESS",
}

DIRECTION_TOKENS: dict[str, str] = {
    "FORWARD": "forward",
    "BACK": "back",
    "RIGHT": "right",
    "LEFT": "left",
}

# closer -> opener it must pop
CLOSERS: dict[str, str] = {
    "RBRACKET": "LBRACKET",
    "END": "TO",
}

# opener -> literal text of the closer that is still missing
OPENERS: dict[str, str] = {
    "LBRACKET": "]",
    "TO": "end",
}

ALIASABLE_KEYWORDS: tuple[str, ...] = (
    "forward",
    "back",
    "right",
    "left",
    "repeat",
    "to",
    "end",
)

LOGO_ABBREVIATIONS: dict[str, str] = {
    "fd": "forward",
    "bk": "back",
    "rt": "right",
    "lt": "left",
}

INT32_MAX = 2**31 - 1

SAMPLE_PROGRAM = """
to rect :arg1 :arg2
    repeat 2 [
        forward :arg1
        right 90
        forward :arg2
        right 90
    ]
end
rect 10 20
"""
