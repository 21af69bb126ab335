"""Browser Automation Package.

Provides browser automation infrastructure including:
- chromedriver / firefoxdriver: remote session options per browser
- driver_factory: remote WebDriver session creation with retries
- selenium_utils: element lookup, wait and click helpers
- window_switch: window registry and the window-switch resolver
"""

_SUBMODULES = frozenset(["chromedriver", "driver_factory", "firefoxdriver", "selenium_utils", "window_switch"])


def __getattr__(name: str):
    """Lazy import submodules on attribute access."""
    if name in _SUBMODULES:
        import importlib

        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available submodules."""
    return list(_SUBMODULES)
