import pytest

from osmshapes.config import APIConfig, ParserConfig, get_config, validate_config


def test_default_config_is_valid():
    validate_config(get_config())


def test_invalid_values_are_all_reported():
    config = ParserConfig(
        group_by_tag="  ",
        route_member_warning_threshold=0,
        api=APIConfig(overpass_url="", max_retries=0),
    )

    with pytest.raises(ValueError) as exc_info:
        validate_config(config)

    message = str(exc_info.value)
    assert message.startswith("Configuration validation failed:")
    assert "route_member_warning_threshold must be positive" in message
    assert "group_by_tag must be a non-empty tag key" in message
    assert "api.overpass_url is required" in message
    assert "api.max_retries must be at least 1" in message


def test_missing_api_section():
    with pytest.raises(ValueError, match="api configuration is required"):
        validate_config(ParserConfig(api=None))


def test_default_sort_puts_largest_geometries_first():
    assert ParserConfig().sort_by == "nodes-desc"
