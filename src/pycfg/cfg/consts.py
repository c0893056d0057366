# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/18 14:10:05
# @Author : pycfg contributors

from enum import Enum, StrEnum, auto


class ParseAction(Enum):
    NEW_LINE = auto()  # initial, and after every finished statement.
    SECTION = auto()
    INHERITANCE = auto()
    ATTRIBUTE = auto()
    KEY = auto()
    VALUE = auto()
    VALUE_ARRAY = auto()
    STRING_VALUE = auto()
    COMMENT = auto()
    MULTILINE_COMMENT = auto()
    PREPROCESSOR = auto()
    INCLUDE = auto()
    ERROR = auto()


# states where a stray space is an error (unless spaces are ignored).
TOKEN_STATES = frozenset((
    ParseAction.SECTION,
    ParseAction.INHERITANCE,
    ParseAction.ATTRIBUTE,
    ParseAction.KEY,
    ParseAction.VALUE,
))

COMMENT_STATES = frozenset((
    ParseAction.COMMENT,
    ParseAction.MULTILINE_COMMENT,
))


class CfgMark(StrEnum):
    COMMENT = ';'
    MULTILINE_COMMENT = '|'
    ESCAPE = '\\'
    QUOTE = '"'
    PREPROCESSOR = '#'
    INCLUDE_OPEN = '<'
    INCLUDE_CLOSE = '>'
    SECTION_OPEN = '['
    SECTION_CLOSE = ']'
    INHERIT = ':'
    ASSIGN = '='
    SEPARATOR = ','
    NEWLINE = '\n'


ESCAPES = {
    '\\': '\\',
    'n': '\n',
    '"': '"',
    "'": "'",
}

INCLUDE_DIRECTIVE = 'include'


class Message(StrEnum):
    SPACE = 'Space in wrong place'
    UNKNOWN_ESCAPE = 'Unknown escape-sequence symbol'
    UNEXPECTED_ESCAPE = 'Unexpected escape-symbol'
    PREPROCESSOR = 'Preprocessor parse error'
    NEW_LINE = 'New line parse error'
    SECTION_NAMING = 'Section naming parse error'
    ENUMERATION = 'Enumeration error'
    INHERITANCE = 'Inheritance error'
    SET_VALUE = 'Set value error'
    INVALID_CHARACTER = 'Invalid character error'
