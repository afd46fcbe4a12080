"""
Unit tests for the tree walking helpers used by mirror sync.
"""
import uuid
from types import SimpleNamespace

from sitecms.services.mirror_service import descendants, roots, walk_tree


def node(name: str, parent=None, position: int = 0) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        parent_id=parent.id if parent else None,
        position=position,
    )


def names(items) -> list[str]:
    return [i.name for i in items]


class TestTreeWalk:
    """Test roots, descendants and the full walk order."""

    def setup_method(self):
        self.a = node("a", position=0)
        self.b = node("b", position=1)
        self.a1 = node("a1", self.a, position=0)
        self.a2 = node("a2", self.a, position=1)
        self.a1x = node("a1x", self.a1)
        self.b1 = node("b1", self.b)
        # Deliberately out of order
        self.items = [self.b1, self.a2, self.a1x, self.b, self.a1, self.a]

    def test_roots(self):
        assert names(roots(self.items)) == ["a", "b"]

    def test_descendants_parent_before_children(self):
        assert names(descendants(self.a, self.items)) == ["a1", "a1x", "a2"]

    def test_leaf_has_no_descendants(self):
        assert descendants(self.a1x, self.items) == []

    def test_walk_lists_roots_then_descendants(self):
        assert names(walk_tree(self.items)) == ["a", "b", "a1", "a1x", "a2", "b1"]

    def test_walk_empty(self):
        assert walk_tree([]) == []
