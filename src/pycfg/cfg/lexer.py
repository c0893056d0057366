# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2026/10/18 14:31:47
# @Author : pycfg contributors

"""The character driven state machine behind `CfgParser.load()`.

Nothing here touches files: `step()` maps one (state, character) pair
to a new state plus side effects on the `SectionStore`, and hands back
diagnostics and `#include` requests for the caller to deal with.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

from .consts import (
    COMMENT_STATES,
    ESCAPES,
    INCLUDE_DIRECTIVE,
    TOKEN_STATES,
    CfgMark,
    Message,
    ParseAction,
)
from .model import SectionStore


@dataclass(frozen=True)
class Diagnostic:
    """One human readable complaint, optionally tagged with a position."""
    message: str
    line: int | None = None
    column: int | None = None
    file: str | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return "Error at line '%d', character at '%d' : %s" % (
            self.line, self.column, self.message)


class Step(NamedTuple):
    diagnostic: Diagnostic | None = None
    include: str | None = None  # path inside `#include <...>`


@dataclass
class ParseContext:
    """Everything the state machine remembers between two characters
    of a single stream. Included files get a context of their own."""
    file: str | None = None
    state: ParseAction = ParseAction.NEW_LINE
    line: int = 1
    column: int = 0
    ignore_spaces: bool = True
    escaping: bool = False
    # name of the section owning the content, `None` after a duplicate.
    current: str | None = None

    section: str = ''
    inheritance: str = ''
    attribute: str = ''
    key: str = ''
    value: str = ''
    directive: str = ''
    include_path: str = ''

    def diagnose(self, message: str) -> Diagnostic:
        return Diagnostic(message, self.line, self.column, self.file)

    def error(self, message: str) -> Diagnostic:
        self.state = ParseAction.ERROR
        return self.diagnose(message)

    def reset_line(self) -> None:
        self.state = ParseAction.NEW_LINE
        self.column = 0
        self.inheritance = self.attribute = ''
        self.key = self.value = ''
        self.directive = self.include_path = ''


def _push_inheritance(
    ctx: ParseContext, store: SectionStore
) -> Diagnostic | None:
    name, ctx.inheritance = ctx.inheritance, ''
    if not name or ctx.current is None:
        return None
    # forward references are dropped, never retried.
    if name not in store:
        return ctx.diagnose(f'Inherited section "{name}" is not exist!')
    store[ctx.current].inheritances.append(name)
    return None


def _push_attribute(ctx: ParseContext, store: SectionStore) -> None:
    name, ctx.attribute = ctx.attribute, ''
    if name and ctx.current is not None:
        store[ctx.current].attributes.append(name)


def _commit_value(ctx: ParseContext, store: SectionStore) -> None:
    if ctx.current is not None:
        store[ctx.current].values[ctx.key] = ctx.value
    ctx.key = ctx.value = ''


def _on_escaped(ctx: ParseContext, char: str) -> Step:
    ctx.escaping = False
    if char in ESCAPES:
        ctx.value += ESCAPES[char]
        return Step()
    return Step(ctx.diagnose(Message.UNKNOWN_ESCAPE))


def _on_comment(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case ParseAction.MULTILINE_COMMENT:
            pass
        case _:
            ctx.state = ParseAction.COMMENT
    return Step()


def _on_multiline_comment(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case ParseAction.COMMENT:
            pass
        case ParseAction.MULTILINE_COMMENT:
            ctx.state = ParseAction.NEW_LINE
        case _:
            ctx.state = ParseAction.MULTILINE_COMMENT
    return Step()


def _on_space(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case ParseAction.PREPROCESSOR:
            if ctx.directive == INCLUDE_DIRECTIVE:
                ctx.state = ParseAction.INCLUDE
            ctx.directive = ''
        case state if state in TOKEN_STATES and not ctx.ignore_spaces:
            return Step(ctx.error(Message.SPACE))
    return Step()


def _on_escape(ctx: ParseContext) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.escaping = True
        case state if state in COMMENT_STATES:
            pass
        case _:
            return Step(ctx.error(Message.UNEXPECTED_ESCAPE))
    return Step()


def _on_quote(ctx: ParseContext) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.state = ParseAction.VALUE
        case ParseAction.VALUE:
            ctx.state = ParseAction.STRING_VALUE
    return Step()


def _on_preprocessor(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.NEW_LINE:
            ctx.state = ParseAction.PREPROCESSOR
            ctx.directive = ''
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case _:
            return Step(ctx.error(Message.PREPROCESSOR))
    return Step()


def _on_newline(ctx: ParseContext, store: SectionStore) -> Step:
    diag = None
    match ctx.state:
        case ParseAction.INHERITANCE:
            diag = _push_inheritance(ctx, store)
        case ParseAction.ATTRIBUTE:
            _push_attribute(ctx, store)
        case ParseAction.VALUE | ParseAction.VALUE_ARRAY:
            _commit_value(ctx, store)
        case ParseAction.STRING_VALUE:
            ctx.value += '\n'
        case (
            ParseAction.NEW_LINE
            | ParseAction.SECTION
            | ParseAction.COMMENT
            | ParseAction.MULTILINE_COMMENT
            | ParseAction.PREPROCESSOR
            | ParseAction.INCLUDE
        ):
            pass
        case _:
            diag = ctx.error(Message.NEW_LINE)

    if ctx.state not in (
        ParseAction.STRING_VALUE, ParseAction.MULTILINE_COMMENT
    ):
        ctx.reset_line()
    ctx.line += 1
    ctx.ignore_spaces = True
    return Step(diag)


def _on_include_close(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case ParseAction.INCLUDE:
            path, ctx.include_path = ctx.include_path, ''
            return Step(include=path)
    return Step()


def _on_section_open(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.NEW_LINE:
            ctx.ignore_spaces = False
            ctx.state = ParseAction.SECTION
            ctx.section = ''
            ctx.current = None
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case _:
            return Step(ctx.error(Message.SECTION_NAMING))
    return Step()


def _on_section_close(
    ctx: ParseContext, store: SectionStore, char: str
) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.SECTION:
            ctx.ignore_spaces = True
            if store.declare(ctx.section) is None:
                return Step(ctx.diagnose(
                    f'Section "{ctx.section}" already exist.'))
            ctx.current = ctx.section
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case _:
            return Step(ctx.error(Message.SECTION_NAMING))
    return Step()


def _on_separator(
    ctx: ParseContext, store: SectionStore, char: str
) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.INHERITANCE:
            return Step(_push_inheritance(ctx, store))
        case ParseAction.ATTRIBUTE:
            _push_attribute(ctx, store)
        case ParseAction.STRING_VALUE | ParseAction.VALUE_ARRAY:
            ctx.value += char
        case ParseAction.VALUE:
            ctx.state = ParseAction.VALUE_ARRAY
            ctx.value += char
        case _:
            return Step(ctx.error(Message.ENUMERATION))
    return Step()


def _on_inherit(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.SECTION:
            ctx.state = ParseAction.INHERITANCE
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case _:
            return Step(ctx.error(Message.INHERITANCE))
    return Step()


def _on_assign(ctx: ParseContext, store: SectionStore, char: str) -> Step:
    diag = None
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.SECTION:
            ctx.state = ParseAction.ATTRIBUTE
        case ParseAction.INHERITANCE:
            diag = _push_inheritance(ctx, store)
            ctx.state = ParseAction.ATTRIBUTE
        case ParseAction.KEY:
            if ctx.current is not None:
                values = store[ctx.current].values
                if ctx.key in values:
                    diag = ctx.diagnose(
                        f'Section "{ctx.current}" key "{ctx.key}" '
                        'already exist.')
                else:
                    values[ctx.key] = ''
            ctx.state = ParseAction.VALUE
        case ParseAction.STRING_VALUE:
            ctx.value += char
        case _:
            diag = ctx.error(Message.SET_VALUE)
    return Step(diag)


def _on_other(ctx: ParseContext, char: str) -> Step:
    match ctx.state:
        case state if state in COMMENT_STATES:
            pass
        case ParseAction.NEW_LINE:
            ctx.state = ParseAction.KEY
            ctx.key += char
        case ParseAction.PREPROCESSOR:
            ctx.directive += char
        case ParseAction.INCLUDE:
            ctx.include_path += char
        case ParseAction.SECTION:
            ctx.section += char
        case ParseAction.INHERITANCE:
            ctx.inheritance += char
        case ParseAction.ATTRIBUTE:
            ctx.attribute += char
        case ParseAction.KEY:
            ctx.key += char
        case (
            ParseAction.VALUE
            | ParseAction.VALUE_ARRAY
            | ParseAction.STRING_VALUE
        ):
            ctx.value += char
        case _:
            return Step(ctx.error(Message.INVALID_CHARACTER))
    return Step()


def step(ctx: ParseContext, store: SectionStore, char: str) -> Step:
    """Consume exactly one character."""
    # the character right after `\` belongs to the escape sequence,
    # it takes no column of its own.
    if ctx.escaping:
        return _on_escaped(ctx, char)

    match char:
        case CfgMark.NEWLINE:
            # line bookkeeping is done there.
            return _on_newline(ctx, store)
        case CfgMark.COMMENT:
            ret = _on_comment(ctx, char)
        case CfgMark.MULTILINE_COMMENT:
            ret = _on_multiline_comment(ctx, char)
        case ' ' | '\t':
            ret = _on_space(ctx, char)
        case CfgMark.ESCAPE:
            ret = _on_escape(ctx)
        case CfgMark.QUOTE:
            ret = _on_quote(ctx)
        case CfgMark.PREPROCESSOR:
            ret = _on_preprocessor(ctx, char)
        case CfgMark.INCLUDE_OPEN:
            if ctx.state is ParseAction.STRING_VALUE:
                ctx.value += char
            ret = Step()
        case CfgMark.INCLUDE_CLOSE:
            ret = _on_include_close(ctx, char)
        case CfgMark.SECTION_OPEN:
            ret = _on_section_open(ctx, char)
        case CfgMark.SECTION_CLOSE:
            ret = _on_section_close(ctx, store, char)
        case CfgMark.SEPARATOR:
            ret = _on_separator(ctx, store, char)
        case CfgMark.INHERIT:
            ret = _on_inherit(ctx, char)
        case CfgMark.ASSIGN:
            ret = _on_assign(ctx, store, char)
        case _:
            ret = _on_other(ctx, char)
    ctx.column += 1
    return ret


def feed(
    ctx: ParseContext, store: SectionStore, chars: Iterable[str]
) -> Iterator[Step]:
    """Run `step()` over `chars`, yielding only the steps that carry
    something (a diagnostic or an include request).

    Stops when `chars` is exhausted. Whatever value is still pending then,
    i.e. the last line has no trailing newline, is NOT committed.
    """
    for char in chars:
        ret = step(ctx, store, char)
        if ret.diagnostic is not None or ret.include is not None:
            yield ret
