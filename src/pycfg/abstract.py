# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/18 13:48:12
# @Author : pycfg contributors

from abc import ABCMeta, abstractmethod
from typing import Callable, Generic, TypeVar

T = TypeVar('T')

# a sink for human readable messages, i.e. `print`.
MessageFunctor = Callable[[str], None]


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | None = None) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, filename: str | None = None) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
