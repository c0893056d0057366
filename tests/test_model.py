from pycfg.cfg.model import Section, SectionStore


def _store() -> SectionStore:
    store = SectionStore()
    store['Root'] = Section(values={'k': 'root', 'deep': 'yes'})
    store['P1'] = Section(inheritances=['Root'], values={'k': 'p1', 'e': ''})
    store['P2'] = Section(values={'k': 'p2', 'e': 'p2e', 'j': 'p2j'})
    store['C'] = Section(inheritances=['P1', 'P2'], values={'own': ''})
    return store


def test_declare_refuses_duplicates():
    store = SectionStore()
    first = store.declare('A')
    first.values['k'] = 'v'
    assert store.declare('A') is None
    assert store['A'].values == {'k': 'v'}
    assert len(store) == 1


def test_lookup_prefers_own_values_even_empty():
    store = _store()
    assert store.lookup('C', 'own', 'default') == ''


def test_lookup_follows_declaration_order():
    store = _store()
    assert store.lookup('C', 'k') == 'p1'
    assert store.lookup('C', 'j') == 'p2j'
    assert store.find_key('C', 'k') == ('P1', 'p1')


def test_lookup_stops_at_first_parent_even_if_empty():
    store = _store()
    # P1 holds `e` but empty, P2 is never consulted.
    assert store.find_key('C', 'e') == (None, None)
    assert store.lookup('C', 'e', 'd') == 'd'


def test_lookup_is_one_level_only():
    store = _store()
    # `deep` lives in Root, a parent of P1, not of C.
    assert store.lookup('P1', 'deep') == 'yes'
    assert store.lookup('C', 'deep', '?') == '?'


def test_lookup_missing_section_or_key():
    store = _store()
    assert store.lookup('Nope', 'k', 'dflt') == 'dflt'
    assert store.lookup('C', 'nope') is None
    assert store.find_key('Nope', 'k') == (None, None)


def test_lookup_ignores_vanished_parent():
    store = _store()
    del store['P1']
    assert store.lookup('C', 'k') == 'p2'
