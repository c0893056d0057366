import json
from io import StringIO

import yaml

from pycfg import dump_json, dump_yaml, to_dict

TEXT = '[Base] = abstract\nk = 1, 2\n[Tank] : Base\nname = "T\\"x"\n'


def test_to_dict(parse):
    store = parse(TEXT).get_section_data()
    assert to_dict(store) == {
        'Base': {'inherits': [], 'attributes': ['abstract'],
                 'values': {'k': '1,2'}},
        'Tank': {'inherits': ['Base'], 'attributes': [],
                 'values': {'name': 'T"x'}},
    }


def test_dump_json(parse):
    store = parse(TEXT).get_section_data()
    buf = StringIO()
    dump_json(store, buf)
    assert json.loads(buf.getvalue()) == to_dict(store)


def test_dump_yaml_keeps_order(parse):
    store = parse(TEXT).get_section_data()
    buf = StringIO()
    dump_yaml(store, buf)
    loaded = yaml.safe_load(buf.getvalue())
    assert loaded == to_dict(store)
    assert list(loaded) == ['Base', 'Tank']
