"""
Unit tests for call_tree_analyzer.core.types configuration.
"""
import pytest
from call_tree_analyzer.core.types import CallTreeConfig


class TestCallTreeConfig:
    """Tests for CallTreeConfig."""

    def test_defaults(self):
        config = CallTreeConfig()
        assert config.duration_unit == 'ms'
        assert config.case_sensitive_search is False
        assert config.strip_flattened_children is False
        assert config.sensitive_fields is None
        assert config.custom_filter is None

    def test_sensitive_fields_frozen_to_tuple(self):
        config = CallTreeConfig(sensitive_fields=['email'])
        assert config.sensitive_fields == ('email',)

    def test_invalid_duration_unit(self):
        with pytest.raises(ValueError):
            CallTreeConfig(duration_unit='minutes')
