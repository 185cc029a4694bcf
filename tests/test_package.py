"""Tests for signaling package exports and metadata."""

import signaling


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(signaling.__version__, str)
        assert "0.1.0" in signaling.__version__

    def test_free_threading_declaration(self) -> None:
        assert signaling._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in signaling.__all__:
            getattr(signaling, name)

    def test_lazy_export_is_the_real_object(self) -> None:
        from signaling.value import signaling_type

        assert signaling.signaling_type is signaling_type

    def test_from_import(self) -> None:
        from signaling import Swapped, swap

        assert callable(swap)
        assert Swapped(id=0, with_id=1).with_id == 1

    def test_invalid_attribute_raises(self) -> None:
        import pytest

        with pytest.raises(AttributeError, match="no attribute"):
            signaling.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
