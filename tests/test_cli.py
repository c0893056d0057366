import json

from pycfg.__main__ import main


def test_query_and_json(tmp_path, capsys):
    (tmp_path / 'sub.cfg').write_text('[S]\nk = sub\n', encoding='utf-8')
    root = tmp_path / 'main.cfg'
    root.write_text('#include <sub.cfg>\n[M] : S\n', encoding='utf-8')

    assert main([str(root), '-b', str(tmp_path), '-q', 'M', 'k']) == 0
    assert capsys.readouterr().out == 'sub\n'

    assert main([str(root), '-b', str(tmp_path), '-f', 'json']) == 0
    dumped = json.loads(capsys.readouterr().out)
    assert dumped['M']['inherits'] == ['S']


def test_cfg_dump_and_time(tmp_path, capsys):
    root = tmp_path / 'main.cfg'
    root.write_text('[A]\nk = v\n', encoding='utf-8')
    assert main([str(root), '-f', 'cfg', '-t', '-s']) == 0
    out = capsys.readouterr().out
    assert out.startswith('Elapsed time: ')
    assert '[A]\nk = v\n' in out
