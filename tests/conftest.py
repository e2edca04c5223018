"""Pytest configuration and shared helpers for mongohat tests."""

from __future__ import annotations

import asyncio

import pytest

_DIRECTORY_MARKERS = {
    "tests/unit": "unit",
    "tests/integration": "integration",
}


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Mark every test with the category of the directory it lives in.

    pytestmark in a conftest.py does not propagate to sibling test modules,
    so the markers are added here instead.

    Usage:
        Run only unit tests: pytest -m unit
        Exclude engine tests: pytest -m "not integration"
    """
    for item in items:
        path = str(item.fspath).replace("\\", "/")
        for directory, marker_name in _DIRECTORY_MARKERS.items():
            if directory in path and not any(
                marker.name == marker_name for marker in item.iter_markers()
            ):
                item.add_marker(getattr(pytest.mark, marker_name))


# =============================================================================
# Duck Typing Conformance Helpers
# =============================================================================


def assert_has_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required methods (duck typing conformance).

    Raises:
        AssertionError: If any required method is missing or not callable.

    Example:
        >>> assert_has_methods(registry, ["find", "terminate"],
        ...                    protocol_name="ProtocolProcessRegistry")
    """
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert hasattr(obj, method_name), f"{name} must have '{method_name}' method"
        assert callable(
            getattr(obj, method_name)
        ), f"{name}.{method_name} must be callable"


def assert_has_async_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required async methods.

    Raises:
        AssertionError: If any method is missing, not callable, or not async.
    """
    assert_has_methods(obj, required_methods, protocol_name=protocol_name)
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert asyncio.iscoroutinefunction(
            getattr(obj, method_name)
        ), f"{name}.{method_name} must be async (coroutine function)"
