"""
Tests for option parsing, merging and resolution.
"""

import pytest

from pyreselect import ConfigurationError, CreateSelectorOptions, default_memoize
from pyreselect.config import set_input_stability_check_enabled
from pyreselect.options import ensure_is_list, merge_options, parse_options, resolve_options


def other_memoize(func, *options):
    return default_memoize(func, *options)


class TestEnsureIsList:
    """Memoizer option normalization."""

    def test_none(self):
        assert ensure_is_list(None) == []

    def test_list_used_verbatim(self):
        comparator = lambda a, b: a == b  # noqa: E731
        assert ensure_is_list([comparator, 5]) == [comparator, 5]

    def test_tuple(self):
        assert ensure_is_list((1, 2)) == [1, 2]

    def test_single_value_wrapped(self):
        settings = {"max_size": 10}
        assert ensure_is_list(settings) == [settings]


class TestParseOptions:
    """Accepted option record shapes."""

    def test_none(self):
        assert parse_options(None).explicit() == {}

    def test_mapping(self):
        options = parse_options({"memoize": default_memoize, "input_stability_check": "never"})
        assert options.explicit() == {"memoize": default_memoize, "input_stability_check": "never"}

    def test_record_returned_as_is(self):
        options = CreateSelectorOptions(memoize=default_memoize)
        assert parse_options(options) is options

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_options({"memoise": default_memoize})
        assert exc_info.value.config_key == "memoise"

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match=r"\[list\]"):
            parse_options([default_memoize])

    def test_error_details(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_options({"input_stability_check": "sometimes"})
        details = exc_info.value.to_dict()
        assert details["type"] == "ConfigurationError"
        assert details["details"]["component"] == "create_selector"


class TestMergeOptions:
    """Shallow, field-by-field merge."""

    def test_override_wins_per_field(self):
        defaults = CreateSelectorOptions(memoize=default_memoize, memoize_options=[1], input_stability_check="never")
        overrides = CreateSelectorOptions(memoize=other_memoize)

        merged = merge_options(defaults, overrides)
        assert merged.memoize is other_memoize
        assert merged.memoize_options == [1]
        assert merged.input_stability_check == "never"

    def test_list_options_not_merged(self):
        defaults = CreateSelectorOptions(memoize_options=[1, 2])
        overrides = CreateSelectorOptions(memoize_options=[3])
        assert merge_options(defaults, overrides).memoize_options == [3]


class TestResolveOptions:
    """Defaults applied at construction time."""

    def test_defaults(self):
        resolved = resolve_options(CreateSelectorOptions(memoize=other_memoize))

        assert resolved.memoize is other_memoize
        assert resolved.memoize_options == []
        assert resolved.args_memoize is default_memoize
        assert resolved.args_memoize_options == []
        assert resolved.input_stability_check == "once"

    def test_global_stability_check(self):
        set_input_stability_check_enabled("always")
        resolved = resolve_options(CreateSelectorOptions(memoize=default_memoize))
        assert resolved.input_stability_check == "always"

    def test_single_memoize_option_wrapped(self):
        comparator = lambda a, b: a == b  # noqa: E731
        resolved = resolve_options(CreateSelectorOptions(memoize=default_memoize, args_memoize_options=comparator))
        assert resolved.args_memoize_options == [comparator]

    def test_missing_memoize(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_options(CreateSelectorOptions())
        assert exc_info.value.config_key == "memoize"
