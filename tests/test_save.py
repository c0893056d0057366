import warnings

import pytest

from pycfg import CfgParser, to_dict
from pycfg.cfg import CfgError

SOURCE = r'''
[Base] = abstract
speed = 4
weapons = 1, 2, 3
empty =

[Tank] : Base = vehicle, heavy
name = "Battle Tank"
motto = "say \"hi\"; then | leave [now]"
lines = "one\ntwo"
path = "C:\\units\\tank"

[Other] : Tank, Base
'''


@pytest.fixture
def source(parse):
    return parse(SOURCE)


def test_dumps_layout(parse):
    cfg = parse('[A]\n[B] : A = x, y\nk = v\n')
    assert cfg.dumps() == '[A]\n\n[B] : A = x, y\nk = v\n\n'


def test_dumps_quotes_when_needed(source):
    text = source.dumps()
    assert 'weapons = 1,2,3\n' in text
    assert 'name = "Battle Tank"\n' in text
    assert 'lines = "one\\ntwo"\n' in text
    assert 'path = "C:\\\\units\\\\tank"\n' in text


def test_save_then_reload(tmp_path, source, messages):
    path = str(tmp_path / 'out.cfg')
    source.save(path)
    again = CfgParser(path, message=messages.append)
    assert messages == []
    assert to_dict(again.get_section_data()) == to_dict(
        source.get_section_data())
    assert again.get_string('Tank', 'motto') == 'say "hi"; then | leave [now]'
    assert again.get_string('Tank', 'lines') == 'one\ntwo'


def test_save_current(tmp_path):
    path = tmp_path / 'units.cfg'
    path.write_text('[A]\nk = 1\n', encoding='utf-8')
    cfg = CfgParser(str(path), message=None)
    cfg.set('A', 'k', 2)
    cfg.save_current()
    assert CfgParser(str(path), message=None).get_string('A', 'k') == '2'


def test_write_without_file_name():
    cfg = CfgParser(message=None)
    with pytest.raises(CfgError):
        cfg.write()


def test_unwritable_section_name_warns(cfg):
    cfg.get_section_data().declare('has space')
    with pytest.warns(UserWarning):
        cfg.dumps()
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        cfg.get_section_data().clear()
        cfg.dumps()


def test_carriage_return_survives_reload(tmp_path, cfg, messages):
    cfg.loads('[A]\nk = x\n')
    cfg.set('A', 'k', 'a\rb')
    path = str(tmp_path / 'cr.cfg')
    cfg.save(path)
    again = CfgParser(path, message=messages.append)
    assert again.get_section_data()['A'].values == {'k': 'a\rb'}
    assert messages == []
