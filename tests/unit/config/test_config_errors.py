import pytest

from hydra_launcher.config.errors import ConfigurationError


@pytest.mark.parametrize(
    ("factory", "args", "expected"),
    [
        (ConfigurationError.missing_value, ("param", "context"), "param is missing or empty: context"),
        (ConfigurationError.invalid_value, ("name", 5, "must be positive"), "Invalid value for name: 5. must be positive"),
        (ConfigurationError.load_failed, ("resource", "id"), "Failed to load resource for id"),
        (ConfigurationError.load_failed, ("resource",), "Failed to load resource"),
    ],
)
def test_configuration_error_factories(factory, args, expected):
    exc = factory(*args)
    assert isinstance(exc, ConfigurationError)
    assert str(exc) == expected
