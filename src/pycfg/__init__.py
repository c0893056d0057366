# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 13:45:02
# @Author : pycfg contributors

import logging

from .cfg import CfgParser, Diagnostic, Section, SectionStore
from .export import dump_json, dump_yaml, to_dict

__all__ = [
    'CfgParser', 'Diagnostic', 'Section', 'SectionStore',
    'to_dict', 'dump_json', 'dump_yaml'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
