"""
Tests for test tree nodes.

Focus Areas:
1. Acting focus/pending flags on scopes and leaf tests
2. Active focus detection across the tree
3. Top-down propagation of focus and pending markings
4. Leaf test execution eligibility
"""

from sprig.core import Hook, HookKind, LeafTest, Mark, Scope, ScopeKind


def make_test(title="t", mark=Mark.NONE):
    return LeafTest(title=title, body=lambda ctx: True, mark=mark)


def make_scope(title="s", mark=Mark.NONE, kind=ScopeKind.DESCRIBE):
    return Scope(kind=kind, title=title, mark=mark)


class TestActingFlags:
    """Acting flags combine the node's own mark with inherited state."""

    def test_unmarked_test_is_neither_focused_nor_pending(self):
        test = make_test()
        assert not test.acting_focused
        assert not test.acting_pending

    def test_own_mark_sets_acting_flag(self):
        assert make_test(mark=Mark.FOCUSED).acting_focused
        assert make_test(mark=Mark.PENDING).acting_pending

    def test_inherited_flags_set_acting_flags(self):
        test = make_test()
        test.propagate(True, True)
        assert test.acting_focused
        assert test.acting_pending

    def test_scope_path_lists_titles_from_root(self):
        root = make_scope("root", kind=ScopeKind.TOP_LEVEL)
        child = make_scope("child")
        grandchild = make_scope("grandchild")
        root.add_child(child)
        child.add_child(grandchild)
        assert grandchild.path == ("root", "child", "grandchild")


class TestActiveFocus:
    """Test has_active_focus resolution."""

    def test_tree_without_focus(self):
        root = make_scope()
        root.add_test(make_test())
        child = make_scope()
        child.add_test(make_test())
        root.add_child(child)
        assert not root.has_active_focus()

    def test_focused_leaf_deep_in_tree(self):
        root = make_scope()
        child = make_scope()
        grandchild = make_scope()
        grandchild.add_test(make_test(mark=Mark.FOCUSED))
        child.add_child(grandchild)
        root.add_child(child)
        assert root.has_active_focus()

    def test_focused_scope_without_tests(self):
        root = make_scope()
        root.add_child(make_scope(mark=Mark.FOCUSED))
        assert root.has_active_focus()

    def test_pending_scope_hides_focus_below_it(self):
        root = make_scope()
        pending = make_scope(mark=Mark.PENDING)
        pending.add_test(make_test(mark=Mark.FOCUSED))
        pending.add_child(make_scope(mark=Mark.FOCUSED))
        root.add_child(pending)
        assert not root.has_active_focus()

    def test_pending_scope_marked_focused_by_descendant_does_not_count(self):
        root = make_scope(mark=Mark.PENDING)
        root.add_test(make_test(mark=Mark.FOCUSED))
        assert not root.has_active_focus()


class TestPropagation:
    """Test top-down focus and pending propagation."""

    def test_focus_flows_to_descendants(self):
        root = make_scope()
        focused = make_scope(mark=Mark.FOCUSED)
        inner = make_scope()
        leaf = make_test()
        inner.add_test(leaf)
        focused.add_child(inner)
        root.add_child(focused)

        root.propagate(False, False)

        assert inner.acting_focused
        assert leaf.acting_focused
        assert not root.acting_focused

    def test_pending_dominates_focus(self):
        root = make_scope()
        pending = make_scope(mark=Mark.PENDING)
        focused_leaf = make_test(mark=Mark.FOCUSED)
        pending.add_test(focused_leaf)
        root.add_child(pending)

        root.propagate(False, False)

        assert focused_leaf.acting_pending
        assert not focused_leaf.should_execute(True)
        assert not focused_leaf.should_execute(False)

    def test_descendant_cannot_clear_inherited_pending(self):
        root = make_scope(mark=Mark.PENDING)
        focused_child = make_scope(mark=Mark.FOCUSED)
        leaf = make_test()
        focused_child.add_test(leaf)
        root.add_child(focused_child)

        root.propagate(False, False)

        assert focused_child.acting_pending
        assert leaf.acting_pending

    def test_siblings_do_not_share_markings(self):
        root = make_scope()
        focused = make_scope(mark=Mark.FOCUSED)
        plain = make_scope()
        plain_leaf = make_test()
        plain.add_test(plain_leaf)
        root.add_child(focused)
        root.add_child(plain)

        root.propagate(False, False)

        assert not plain_leaf.acting_focused
        assert not plain_leaf.acting_pending


class TestShouldExecute:
    """Test leaf eligibility under both focus modes."""

    def test_runs_everything_without_focus_mode(self):
        assert make_test().should_execute(False)

    def test_only_focused_runs_in_focus_mode(self):
        assert not make_test().should_execute(True)
        assert make_test(mark=Mark.FOCUSED).should_execute(True)

    def test_pending_never_runs(self):
        assert not make_test(mark=Mark.PENDING).should_execute(False)


class TestCounting:
    def test_count_tests_includes_every_depth(self):
        root = make_scope()
        root.add_test(make_test())
        child = make_scope(kind=ScopeKind.GROUP)
        child.add_test(make_test())
        child.add_test(make_test(mark=Mark.PENDING))
        root.add_child(child)
        assert root.count_tests() == 3

    def test_hook_runs_its_body(self):
        ran = []
        Hook(kind=HookKind.BEFORE_EACH, body=lambda: ran.append(1)).run()
        assert ran == [1]
