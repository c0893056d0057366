# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/18 15:20:09
# @Author : pycfg contributors

"""Note: `#include <path>` is resolved against the *base path*
given by `CfgParser.set_base_path()`, NOT against the including file,
and every file of the tree is read into one `SectionStore`:

    - game
        - main.cfg        (`#include <units/tanks.cfg>`)
        - units
            - tanks.cfg

    `CfgParser('game/main.cfg', base_path='game')`

So section names are unique across the whole tree.
There's no cycle detection, a file including itself recurses
until Python gives up.
"""

import logging
from io import StringIO
from os.path import join
from typing import Any, Callable, TypeVar
from warnings import warn

import chardet

from ..abstract import FileHandler, MessageFunctor
from .lexer import Diagnostic, ParseContext, feed
from .model import Section, SectionStore

__all__ = ['CfgParser', 'CfgError', 'ValueConversionError']

logger = logging.getLogger(__name__)

T = TypeVar('T')

TRUE_STRINGS = ('true', 'on', 'yes')

# chars that won't survive a reload if a value is written bare.
_QUOTE_TRIGGERS = frozenset(' \t\r\n;|\\"#<>[]:=')


def _to_stream(text: str) -> StringIO:
    # only `\r\n` is a line break, a lone `\r` stays part of the text.
    return StringIO(text.replace('\r\n', '\n'), newline='\n')


class CfgError(Exception):
    """Base of errors raised by this package."""
    pass


class ValueConversionError(CfgError, ValueError):
    """A string value doesn't look like the requested type."""
    pass


def make_value(string_value: str, converter: Callable[[str], T]) -> T:
    """Cast one raw string to `converter`'s type.

    `bool` is special-cased: only `true`, `on` and `yes` are truthy.
    """
    if converter is bool:
        return string_value.strip().lower() in TRUE_STRINGS  # type: ignore
    try:
        return converter(string_value)
    except (TypeError, ValueError) as e:
        raise ValueConversionError(
            f'Cannot convert "{string_value}" '
            f'to {getattr(converter, "__name__", converter)}.') from e


def to_value_string(value: Any) -> str:
    """Reverse of `make_value()`, as far as `set()` needs it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(to_value_string(i) for i in value)
    return str(value)


def quote_value(value: str) -> str:
    if not _QUOTE_TRIGGERS.intersection(value):
        return value
    escaped = (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n'))
    return f'"{escaped}"'


def _default_message_functor(msg: str) -> None:
    logger.warning('CFGParser: %s', msg)


class CfgParser(FileHandler[SectionStore]):
    """Loads CFG files into a `SectionStore` and answers questions about it.

    Malformed input never raises. Every complaint goes to the message
    functor (logging by default) and is also kept in `self.diagnostics`.
    """
    def __init__(
        self,
        file_path: str | None = None, *,
        base_path: str = '',
        encoding: str | None = None,
        message: MessageFunctor | None = _default_message_functor
    ) -> None:
        super().__init__(file_path)
        self._codec = encoding
        self._base_path = base_path
        self._store = SectionStore()
        self.diagnostics: list[Diagnostic] = []
        self.set_message_functor(message)
        if file_path is not None:
            self.load(file_path)

    # --- configuration ---

    @property
    def base_path(self) -> str:
        return self._base_path

    def set_base_path(self, path: str) -> None:
        """Sets include base path."""
        self._base_path = path

    def set_message_functor(self, func: MessageFunctor | None) -> None:
        """You can use your own message functor, or `None` to mute."""
        if func is not None and not callable(func):
            raise TypeError(f'message functor must be callable, not {func!r}')
        self._msg_functor = func

    @property
    def current_file(self) -> str | None:
        return self._fn

    # --- diagnostics ---

    def _report(self, diag: Diagnostic) -> None:
        self.diagnostics.append(diag)
        if self._msg_functor is not None:
            self._msg_functor(str(diag))

    def _msg(self, message: str) -> None:
        self._report(Diagnostic(message, file=self._fn))

    def _missing_section(self, section: str) -> None:
        self._msg(f'Section "{section}" is not exist!')

    def replay(self, sink: MessageFunctor) -> None:
        """Send every collected diagnostic through `sink` again."""
        for i in self.diagnostics:
            sink(str(i))

    # --- reading ---

    def _decode_file(self, filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        buf = None
        for codec in (self._codec, 'utf-8-sig'):
            if codec is None:
                continue
            try:
                buf = raw.decode(codec)
                break
            except (UnicodeDecodeError, LookupError):
                logger.debug('%s is not %s encoded.', filename, codec)

        if buf is None:
            guess = chardet.detect(raw)
            codec = guess.get('encoding')
            if codec is None or guess.get('confidence', 0) < 0.8:
                codec = 'utf-8'
            logger.debug('guessed %s for %s.', codec, filename)
            buf = raw.decode(codec, errors='replace')
        return _to_stream(buf)

    def _parse(self, ctx: ParseContext, buf: StringIO) -> None:
        for ret in feed(ctx, self._store, buf.read()):
            if ret.diagnostic is not None:
                self._report(ret.diagnostic)
            if ret.include is not None:
                self._include(ret.include)

    def _include(self, path: str) -> None:
        outer = self._fn
        self.load(join(self._base_path, path))
        self._fn = outer

    def load(self, file_path: str) -> SectionStore:
        """Load and parse a config file into the current store.

        Sections already loaded stay, so loading twice reports
        every section of the second pass as a duplicate.
        """
        self._fn = file_path
        try:
            buf = self._decode_file(file_path)
        except OSError as e:
            logger.debug('open %s: %s', file_path, e)
            self._msg(f'Cannot open file "{file_path}".')
            return self._store
        self._parse(ParseContext(file=file_path), buf)
        return self._store

    def loads(self, text: str) -> SectionStore:
        """Parse a string. `#include` still resolves against base path."""
        self._parse(ParseContext(), _to_stream(text))
        return self._store

    def read(self) -> SectionStore:
        """Load the file the parser was created with (again)."""
        if self._fn is None:
            raise CfgError('No file to read.')
        return self.load(self._fn)

    def clear(self) -> None:
        self._store.clear()
        self.diagnostics.clear()

    # --- queries ---

    def has_section(self, section: str) -> bool:
        """Checking is section exists."""
        return section in self._store

    def has_key(self, section: str, key: str) -> bool:
        """Checking is key exist inside a section (inheritance ignored)."""
        if section not in self._store:
            self._missing_section(section)
            return False
        return key in self._store[section].values

    def has_attribute(self, section: str, attribute: str) -> bool:
        return (section in self._store
                and attribute in self._store[section].attributes)

    def has_attributes(self, section: str) -> bool:
        if section not in self._store:
            self._missing_section(section)
            return False
        return bool(self._store[section].attributes)

    def get_attributes(self, section: str) -> list[str]:
        if section not in self._store:
            self._missing_section(section)
            return []
        return self._store[section].attributes

    def is_inherited_from(self, section: str, base_section: str) -> bool:
        return (section in self._store
                and base_section in self._store[section].inheritances)

    def has_inheritances(self, section: str) -> bool:
        if section not in self._store:
            self._missing_section(section)
            return False
        return bool(self._store[section].inheritances)

    def get_inheritances(self, section: str) -> list[str]:
        if section not in self._store:
            self._missing_section(section)
            return []
        return self._store[section].inheritances

    def get_string(self, section: str, key: str, default: str = '') -> str:
        """Get the raw string of `key`.

        Looks into `section` itself first, then into each parent in
        declaration order (`[section] : higher, middle, lower`).
        Parents of parents are not consulted.
        """
        return self._store.lookup(section, key, default)

    def get(
        self,
        section: str,
        key: str,
        default: T | None = None,
        converter: Callable[[str], T] = str
    ) -> T | None:
        """`get_string()` then cast. Empty or missing gives `default`,
        and so does a value that fails to convert (with a message)."""
        value = self.get_string(section, key)
        if not value:
            return default
        try:
            return make_value(value, converter)
        except ValueConversionError as e:
            self._msg(f'Section "{section}" key "{key}": {e}')
            return default

    def get_array(
        self,
        section: str,
        key: str,
        converter: Callable[[str], T] = str
    ) -> list[T]:
        """Split a value like `1,2,3` on commas and cast each item."""
        value = self.get_string(section, key)
        if not value:
            return []
        try:
            return [make_value(i, converter) for i in value.split(',')]
        except ValueConversionError as e:
            self._msg(f'Section "{section}" key "{key}": {e}')
            return []

    def get_section_count(self) -> int:
        return len(self._store)

    def get_section_data(self) -> SectionStore:
        return self._store

    # --- writing ---

    def set(self, section: str, key: str, value: Any) -> None:
        """Overwrite an *existing* key. New keys are refused."""
        if section not in self._store:
            self._missing_section(section)
            return
        values = self._store[section].values
        if key not in values:
            self._msg(f'Section "{section}" key "{key}" is not exist!')
            return
        values[key] = to_value_string(value)

    @staticmethod
    def _output_section(name: str, data: Section) -> str:
        if _QUOTE_TRIGGERS.intersection(name):
            warn(f'Section name "{name}" cannot be read back as written.')
        ret = f'[{name}]'
        if data.inheritances:
            ret += ' : ' + ', '.join(data.inheritances)
        if data.attributes:
            ret += ' = ' + ', '.join(data.attributes)
        ret += '\n'
        for k, v in data.values.items():
            ret += f'{k} = {quote_value(v)}\n'
        return ret

    def dumps(self) -> str:
        return ''.join(
            self._output_section(k, v) + '\n' for k, v in self._store.items())

    def write(self, filename: str | None = None) -> None:
        """Save to *one* file, includes are NOT restored."""
        if filename is None:
            filename = self._fn
        if filename is None:
            raise CfgError('No file to write.')
        with open(filename, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(self.dumps())

    def save(self, file_path: str) -> None:
        self.write(file_path)

    def save_current(self) -> None:
        self.write(self._fn)

    def __str__(self) -> str:
        return f'CFG root: {super().__str__()} ({self._codec})'
