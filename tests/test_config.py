"""Tests for signaling.config — SignalingConfig validation."""

import copy

import pytest

from signaling._errors import ConfigError
from signaling.config import SignalingConfig


class TestSignalingConfig:
    """Defaults, immutability and validation."""

    def test_defaults(self) -> None:
        config = SignalingConfig()
        assert config.first_id == 0
        assert config.deep_copy is True
        assert config.on_duplicate_attach == "error"
        assert config.on_listener_error == "raise"

    def test_frozen(self) -> None:
        config = SignalingConfig()
        with pytest.raises(AttributeError):
            config.first_id = 5  # type: ignore[misc]

    def test_equality(self) -> None:
        assert SignalingConfig(first_id=3) == SignalingConfig(first_id=3)

    def test_copier_deep(self) -> None:
        assert SignalingConfig().copier is copy.deepcopy

    def test_copier_shallow(self) -> None:
        assert SignalingConfig(deep_copy=False).copier is copy.copy

    def test_negative_first_id_rejected(self) -> None:
        with pytest.raises(ConfigError, match="first_id"):
            SignalingConfig(first_id=-1)

    def test_non_int_first_id_rejected(self) -> None:
        with pytest.raises(ConfigError, match="first_id"):
            SignalingConfig(first_id="1")  # type: ignore[arg-type]

    def test_bool_first_id_rejected(self) -> None:
        with pytest.raises(ConfigError):
            SignalingConfig(first_id=True)

    def test_bad_duplicate_policy(self) -> None:
        with pytest.raises(ConfigError, match="on_duplicate_attach"):
            SignalingConfig(on_duplicate_attach="replace")  # type: ignore[arg-type]

    def test_bad_error_policy(self) -> None:
        with pytest.raises(ConfigError, match="on_listener_error"):
            SignalingConfig(on_listener_error="swallow")  # type: ignore[arg-type]
