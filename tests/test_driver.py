"""Tests for the reporting loops."""

from sage.combinat.root_system.cartan_matrix import CartanMatrix

from codetheta import EvenLattice, LatticeDatabase, named_code, report_code_classes, report_lattice_classes, report_subgroups


def test_report_code_classes(capsys):
    C = named_code('e8')
    rows = report_code_classes(C, prec = 3, database = LatticeDatabase(max_rank = 8))
    out = capsys.readouterr().out
    assert len(rows) == len(C.automorphism_group().conjugacy_classes_representatives())
    assert rows[0][4] == 'E8'
    assert out.count('-' * 60) == len(rows)
    assert 'report_lattice_classes()' in out
    assert all(f.is_integral() for _, _, _, f, _ in rows)


def test_report_twisted_code_classes(capsys):
    C = named_code('e8')
    rows = report_code_classes(C, prec = 3, twists = True, database = LatticeDatabase(max_rank = 8))
    capsys.readouterr()
    assert any(X for _, X, _, _, _ in rows)
    assert all(f.is_integral() for _, _, _, f, _ in rows)


def test_report_subgroups(capsys):
    rows = report_subgroups(named_code('e8'), prec = 3, max_order = 8)
    capsys.readouterr()
    assert rows
    assert all(H.order() <= 8 for H, _, _ in rows)


def test_report_super_code_sign_classes(capsys):
    C = named_code('g24')
    G = C.automorphism_group()
    rows = report_code_classes(C, prec = 2, twists = True, sigmas = [G.one()], database = LatticeDatabase(max_rank = 4))
    out = capsys.readouterr().out
    assert 'report_lattice_classes()' not in out
    assert sorted(set(len(X) for _, X, _, _, _ in rows)) == list(range(25))
    assert any(len(X) == 1 and e.frame_shape_string() == '1^22 2^1' for _, X, e, _, _ in rows)
    assert all(f.is_integral() for _, _, _, f, _ in rows)


def test_report_super_code_even_cycles(capsys):
    C = named_code('g24')
    G = C.automorphism_group()
    sigma = next(s for s in G.conjugacy_classes_representatives() if sorted(s.cycle_type()) == [1] * 8 + [2] * 8)
    rows = report_code_classes(C, prec = 2, twists = True, sigmas = [sigma], database = LatticeDatabase(max_rank = 4))
    capsys.readouterr()
    assert any(e.frame_shape_string() == '1^8 2^6 4^1' for _, _, e, _, _ in rows)
    assert any(X and any(sigma(i) not in X for i in X) for _, X, _, _, _ in rows)
    assert all(f.is_integral() for _, _, _, f, _ in rows)


def test_report_lattice_classes(capsys):
    L = EvenLattice(CartanMatrix(['A', 2]))
    rows = report_lattice_classes(L, prec = 3)
    out = capsys.readouterr().out
    assert len(rows) == len(L.automorphism_group().conjugacy_classes_representatives())
    assert out.count('-' * 60) == len(rows)
    assert all(f.is_integral() for _, f, _, _ in rows)
    assert all(n in [g.order(), 2 * g.order()] for g, _, _, n in rows)
