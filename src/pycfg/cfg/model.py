# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/18 14:02:31
# @Author : pycfg contributors

"""
Basically CFG Structure with (one level) Inheritance support.

```
[name] : base0, base1 = attribute0, attribute1
key = value
```

As for `#include <...>`, just see `cfg.parser`.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class Section:
    """A declared `[section]`.

    `inheritances` keeps declaration order, which is also the lookup priority
    (`[section] : higher, middle, lower`).
    Array values stay as one comma-joined string until someone asks for them.
    """
    inheritances: list[str] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict)


class SectionStore(MutableMapping[str, Section]):
    """CFG 文档（或树）表示：小节名到`Section`的映射。

    小节名全局唯一。重复声明不会覆盖、也不会合并，见`declare()`。
    """
    def __init__(self) -> None:
        self.__raw: dict[str, Section] = {}

    def __getitem__(self, key: str) -> Section:
        return self.__raw[key]

    def __setitem__(self, key: str, value: Section) -> None:
        self.__raw[key] = value

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return 'SectionStore { .cnt = %d }' % len(self.__raw)

    def declare(self, name: str) -> Section | None:
        """Add an empty section named `name` and return it.

        Returns `None` if `name` is already taken, in which case
        the existing section is left as it was.
        """
        if name in self.__raw:
            return None
        ret = self.__raw[name] = Section()
        return ret

    def find_key(
        self, section: str, key: str
    ) -> tuple[str | None, str | None]:
        """Search `key` in `section`, then in its *direct* parents.

        Returns:
            - if found: `(name of the section holding it, value)`;
            - if not found: `(None, None)`.

        Parents of parents are NOT visited. The first parent holding `key`
        decides, and if its value is empty the key counts as not found.
        """
        if section not in self.__raw:
            return None, None
        data = self.__raw[section]
        if key in data.values:
            return section, data.values[key]
        for base in data.inheritances:
            if base not in self.__raw:
                continue
            values = self.__raw[base].values
            if key in values:
                return (base, values[key]) if values[key] else (None, None)
        return None, None

    def lookup(
        self, section: str, key: str, default: str | None = None
    ) -> str | None:
        """`find_key()`, but only the value (or `default`)."""
        _, value = self.find_key(section, key)
        return default if value is None else value

    def clear(self) -> None:
        self.__raw.clear()
