# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2026/10/18 16:05:33
# @Author : pycfg contributors

"""Dump a `SectionStore` into formats other tools understand.

Array values are kept as the joined string they are stored as,
and inheritance is NOT merged into the output.
"""

import json
from typing import TextIO, TypedDict

import yaml

from .cfg.model import SectionStore


class SectionMeta(TypedDict):
    inherits: list[str]
    attributes: list[str]
    values: dict[str, str]


def to_dict(store: SectionStore) -> dict[str, SectionMeta]:
    return {
        name: SectionMeta(
            inherits=list(data.inheritances),
            attributes=list(data.attributes),
            values=dict(data.values))
        for name, data in store.items()
    }


def dump_json(store: SectionStore, fp: TextIO, indent: int = 2) -> None:
    json.dump(to_dict(store), fp, ensure_ascii=False, indent=indent)


def dump_yaml(store: SectionStore, fp: TextIO) -> None:
    # keep declaration order, pyyaml sorts by default.
    yaml.safe_dump(
        to_dict(store), fp,
        allow_unicode=True, sort_keys=False, default_flow_style=False)
