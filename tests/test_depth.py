"""Tests for breadth-first depth classification."""

import pytest

from graph.depth import DepthClassifier, DepthState
from graph.package import Package


@pytest.fixture
def diamond():
    """root -> a -> c, root -> b -> c -> d, plus a shortcut root -> d."""
    packages = {name: Package(name, "1.0.0") for name in ["root", "a", "b", "c", "d"]}
    packages["root"].add_dependency(packages["a"])
    packages["root"].add_dependency(packages["b"])
    packages["a"].add_dependency(packages["c"])
    packages["b"].add_dependency(packages["c"])
    packages["c"].add_dependency(packages["d"])
    packages["root"].add_dependency(packages["d"])
    return packages


def _classifier(packages):
    nodes = list(packages.values())
    return DepthClassifier(lambda: nodes)


class TestDepthClassifier:
    """Test depth computation and its caching rules."""

    def test_default_roots(self, diamond):
        """Packages nothing depends on are the default roots."""
        classifier = _classifier(diamond)
        assert classifier.default_roots() == [diamond["root"]]

    def test_minimum_hop_count(self, diamond):
        """The shortest path wins."""
        classifier = _classifier(diamond)
        classifier.calculate()
        depths = {name: pkg.depth for name, pkg in diamond.items()}
        assert depths == {"root": 0, "a": 1, "b": 1, "c": 2, "d": 1}
        assert classifier.state is DepthState.COMPUTED
        assert classifier.max_depth() == 2

    def test_custom_roots_recompute(self, diamond):
        """Explicit roots overwrite earlier depths."""
        classifier = _classifier(diamond)
        classifier.calculate()
        classifier.calculate([diamond["b"]])
        depths = {name: pkg.depth for name, pkg in diamond.items()}
        assert depths == {"root": None, "a": None, "b": 0, "c": 1, "d": 2}

    def test_second_default_call_is_noop(self, diamond):
        """A later call without roots keeps custom-root results."""
        classifier = _classifier(diamond)
        classifier.calculate([diamond["a"]])
        before = {name: pkg.depth for name, pkg in diamond.items()}
        classifier.calculate()
        assert {name: pkg.depth for name, pkg in diamond.items()} == before

    def test_lazy_default_computation(self, diamond):
        """Queries trigger the default computation once."""
        classifier = _classifier(diamond)
        assert classifier.state is DepthState.NOT_COMPUTED
        assert classifier.max_depth() == 2
        assert classifier.state is DepthState.COMPUTED

    def test_packages_by_depth_ranges(self, diamond):
        """Ranges are half-open and None means unbounded."""
        classifier = _classifier(diamond)
        assert classifier.packages_by_depth(1, 2) == [diamond["a"], diamond["b"], diamond["d"]]
        assert classifier.packages_by_depth(2, None) == [diamond["c"]]
        assert len(classifier.packages_by_depth(0, None)) == 5

    def test_unreached_packages_count_as_deepest(self, diamond):
        """Packages outside the custom roots' reach only appear in unbounded ranges."""
        classifier = _classifier(diamond)
        classifier.calculate([diamond["c"]])
        assert classifier.packages_by_depth(0, 10) == [diamond["c"], diamond["d"]]
        for k in range(4):
            low = classifier.packages_by_depth(0, k)
            high = classifier.packages_by_depth(k, None)
            assert len(low) + len(high) == len(diamond)

    def test_cycle_terminates(self):
        """Cycles do not cause revisits."""
        a, b, c = Package("a", "1"), Package("b", "1"), Package("c", "1")
        a.add_dependency(b)
        b.add_dependency(c)
        c.add_dependency(b)
        classifier = DepthClassifier(lambda: [a, b, c])
        classifier.calculate()
        assert (a.depth, b.depth, c.depth) == (0, 1, 2)

    def test_pure_cycle_has_no_roots(self):
        """A graph that is one cycle has no default roots and no depths."""
        a, b = Package("a", "1"), Package("b", "1")
        a.add_dependency(b)
        b.add_dependency(a)
        classifier = DepthClassifier(lambda: [a, b])
        assert classifier.max_depth() == 0
        assert a.depth is None and b.depth is None
        assert classifier.packages_by_depth(0, None) == [a, b]

    def test_empty_graph(self):
        """An empty graph has depth 0."""
        classifier = DepthClassifier(lambda: [])
        assert classifier.max_depth() == 0
        assert classifier.packages_by_depth(0, None) == []
