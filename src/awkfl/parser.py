## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# awkfl — Small grammars for command-line values: escape sequences and `-v` assignments.
#

import lark

from .errors import AwkParseError


ESCAPE_GRAMMAR = r"""?start: _piece*
_piece: OCTAL | ESCAPE | BACKSLASH | TEXT

OCTAL.3: /\\[0-7]{1,3}/
ESCAPE.2: /\\[^0-7]/s
BACKSLASH.1: "\\"
TEXT: /[^\\]+/
"""

ASSIGN_GRAMMAR = r"""start: NAME "=" VALUE?

NAME: /[A-Za-z_][A-Za-z0-9_]*/
VALUE: /.+/s
"""


ESCAPE_MAP = {
    '"': '"', '\\': '\\', '/': '/',
    'a': '\a', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t', 'v': '\v',
}

_escape_parser = lark.Lark(ESCAPE_GRAMMAR, start='start', parser="lalr", lexer="contextual")
_assign_parser = lark.Lark(ASSIGN_GRAMMAR, start='start', parser="lalr", lexer="contextual")


def _decode_token(token: lark.Token) -> str:
    if token.type == 'OCTAL':
        return chr(int(token[1:], 8) & 0xFF)
    if token.type == 'ESCAPE':
        # Unknown escapes keep their backslash.
        return ESCAPE_MAP.get(token[1], token)
    return str(token)


def decode_escapes(text: str) -> tuple[str, int]:
    """Replace backslash escape sequences in `text`, returning the result and its length."""
    if '\\' not in text:
        return text, len(text)
    tree = _escape_parser.parse(text)
    tokens = tree.children if isinstance(tree, lark.Tree) else [tree]
    decoded = ''.join(_decode_token(t) for t in tokens)
    return decoded, len(decoded)


def parse_assignment(text: str) -> tuple[str, str]:
    """Split `name=value` into its parts; the value is returned undecoded."""
    try:
        tree = _assign_parser.parse(text)
    except lark.exceptions.UnexpectedInput as exc:
        raise AwkParseError(f"Expected `name=value`, got `{text}`.", text=text, column=getattr(exc, "column", None)) from exc
    name, *rest = tree.children
    return str(name), str(rest[0]) if rest else ''
