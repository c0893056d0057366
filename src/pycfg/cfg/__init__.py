# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 15:58:40
# @Author : pycfg contributors

from .consts import ParseAction
from .lexer import Diagnostic, ParseContext, feed, step
from .model import Section, SectionStore
from .parser import CfgError, CfgParser, ValueConversionError
