"""Tests for the extension resolver."""

import pytest

from extconfig.core.errors import MissingExtensions
from extconfig.extensions.resolver import (
    ALL,
    apply_ignored,
    expand_and_check,
    expand,
    missing_extensions,
)


AVAILABLE = ["blog", "comments", "dashboard", "layouts"]


class TestExpandAndCheck:
    """Tests for wildcard expansion and validation."""

    def test_explicit_list_unchanged(self):
        """A list without the wildcard comes back as given."""
        requested = ["layouts", "blog", "comments"]
        assert expand_and_check(requested, AVAILABLE) == requested

    def test_all_alone(self):
        """[all] means everything, alphabetically, once each."""
        assert expand_and_check([ALL], AVAILABLE) == AVAILABLE

    def test_all_between_explicit_names(self):
        """Explicit names keep their places around the expansion."""
        result = expand_and_check(["dashboard", ALL, "blog"], AVAILABLE)
        assert result == ["dashboard", "comments", "layouts", "blog"]

    def test_all_first(self):
        result = expand_and_check([ALL, "blog"], AVAILABLE)
        assert result == ["comments", "dashboard", "layouts", "blog"]

    def test_all_with_everything_listed(self):
        """The wildcard expands to nothing when every name is explicit."""
        requested = ["layouts", ALL, "dashboard", "comments", "blog"]
        assert expand_and_check(requested, AVAILABLE) == ["layouts", "dashboard", "comments", "blog"]

    def test_empty_list(self):
        """An empty request is legal and enables nothing."""
        assert expand_and_check([], AVAILABLE) == []

    def test_duplicates_kept(self):
        """Names listed twice are not collapsed here."""
        assert expand_and_check(["blog", "blog"], AVAILABLE) == ["blog", "blog"]

    def test_repeated_wildcard_expands_once(self):
        """Only the first wildcard is expanded; later ones are dropped."""
        result = expand_and_check([ALL, "blog", ALL], AVAILABLE)
        assert result == ["comments", "dashboard", "layouts", "blog"]

    def test_input_not_mutated(self):
        requested = ["dashboard", ALL]
        expand_and_check(requested, AVAILABLE)
        assert requested == ["dashboard", ALL]

    def test_stable_across_calls(self):
        first = expand_and_check(["blog", ALL], AVAILABLE)
        second = expand_and_check(["blog", ALL], AVAILABLE)
        assert first == second

    def test_missing_single(self):
        """An unknown name raises MissingExtensions naming it."""
        with pytest.raises(MissingExtensions) as exc_info:
            expand_and_check(["x"], ["a", "b", "c"])
        assert exc_info.value.names == ["x"]

    def test_missing_reports_all_names(self):
        """Every missing name is reported, not only the first."""
        with pytest.raises(MissingExtensions) as exc_info:
            expand_and_check(["x", "blog", ALL, "y"], AVAILABLE)
        assert exc_info.value.names == ["x", "y"]
        assert "x and y" in str(exc_info.value)

    def test_names_are_case_sensitive(self):
        with pytest.raises(MissingExtensions) as exc_info:
            expand_and_check(["Blog"], AVAILABLE)
        assert exc_info.value.names == ["Blog"]


class TestMissingExtensions:
    """Tests for missing name detection."""

    def test_wildcard_never_missing(self):
        assert missing_extensions([ALL], []) == []

    def test_each_missing_name_once(self):
        assert missing_extensions(["x", "x", "y"], ["a"]) == ["x", "y"]


class TestApplyIgnored:
    """Tests for ignore filtering."""

    def test_removes_ignored_keeping_order(self):
        assert apply_ignored(["c", "a", "b"], ["a"]) == ["c", "b"]

    def test_unknown_ignored_name_is_noop(self):
        assert apply_ignored(["a", "b"], ["zzz"]) == ["a", "b"]

    def test_removes_every_duplicate(self):
        assert apply_ignored(["a", "b", "a"], ["a"]) == ["b"]


class TestExpandThenIgnore:
    """End-to-end resolution scenarios."""

    def test_dashboard_first_layouts_ignored(self):
        enabled = apply_ignored(expand(["dashboard", ALL], AVAILABLE), ["layouts"])
        assert enabled == ["dashboard", "blog", "comments"]

    def test_unset_request_enables_everything(self):
        assert expand(None, ["a", "b"]) == ["a", "b"]

    def test_explicit_request_still_ignored(self):
        """Ignoring wins over an explicit request, silently."""
        assert apply_ignored(expand(["blog", "comments"], AVAILABLE), ["blog"]) == ["comments"]

    def test_prefix_and_suffix(self):
        enabled = expand(["layouts", ALL, "blog"], AVAILABLE)
        assert enabled == ["layouts", "comments", "dashboard", "blog"]

    def test_unset_request_returns_a_copy(self):
        available = ["a", "b"]
        expand(None, available).append("c")
        assert available == ["a", "b"]
