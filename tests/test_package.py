"""Tests for package nodes."""

import gc

from graph.package import Package


def test_avoid_duplicates():
    """Repeated edges are recorded once on both sides."""
    package1 = Package("package1", "1.0.1")
    package2 = Package("package2", "0.0.8")

    package1.add_dependency(package2)
    package1.add_dependency(package2)
    package2.add_resolves(package1)

    assert len(package1.dependencies) == 1
    assert len(package2.resolves) == 1
    assert package2.resolves[0] is package1


def test_dependency_order_is_insertion_order():
    """Dependencies and back-edges keep the order they were added in."""
    parent = Package("parent", "1.0.0")
    other = Package("other", "1.0.0")
    a, b = Package("a", "1.0.0"), Package("b", "1.0.0")

    parent.add_dependency(b)
    parent.add_dependency(a)
    other.add_dependency(a)

    assert parent.dependencies == [b, a]
    assert a.resolves == [parent, other]


def test_equal_fields_are_distinct_nodes():
    """Identity, not field equality, decides duplicates."""
    parent = Package("parent", "1.0.0")
    parent.add_dependency(Package("dep", "1.0.0"))
    parent.add_dependency(Package("dep", "1.0.0"))
    assert len(parent.dependencies) == 2


def test_satisfied_versions_deduplicated():
    """Constraint strings are kept once, in first-seen order."""
    package = Package("source-map", "0.5.7")
    for spec in ["^0.5.0", "^0.5.3", "^0.5.0", "~0.5.1"]:
        package.add_satisfied_version(spec)
    assert package.satisfied_versions == ["^0.5.0", "^0.5.3", "~0.5.1"]


def test_optional_dependency_is_also_a_dependency():
    """Optional edges appear in both relations."""
    parent = Package("parent", "1.0.0")
    child = Package("fsevents", "1.2.9")
    parent.add_optional_dependency(child)
    parent.add_optional_dependency(child)
    assert parent.optional_dependencies == [child]
    assert parent.dependencies == [child]
    assert child.resolves == [parent]


def test_self_dependency_does_not_crash():
    """Cycles, including self-loops, are structurally legal."""
    package = Package("loop", "1.0.0")
    package.add_dependency(package)
    assert package.dependencies == [package]
    assert package.resolves == [package]


def test_resolves_does_not_own_parent():
    """A back-edge alone does not keep the depending package alive."""
    child = Package("child", "1.0.0")
    parent = Package("parent", "1.0.0")
    parent.add_dependency(child)
    del parent
    gc.collect()
    assert child.resolves == []


def test_string_representation():
    """Packages render as name@version."""
    package = Package("@babel/core", "7.1.0")
    assert str(package) == "@babel/core@7.1.0"
    assert repr(package) == "Package('@babel/core', '7.1.0')"
    assert package.depth is None
