"""
behave environment for the e2e suite.

Hooks live in core.hooks; this module wires in the project's page-object
and window registries before the shared setup runs.
"""

import sys
from pathlib import Path

# Add project root to path so the harness packages import without installation
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core import hooks  # noqa: E402
from features.registry import PAGE_OBJECTS, WINDOWS  # noqa: E402


def before_all(context):
    context.page_objects = PAGE_OBJECTS
    context.windows = WINDOWS
    hooks.before_all(context)


def before_scenario(context, scenario):
    hooks.before_scenario(context, scenario)


def after_scenario(context, scenario):
    hooks.after_scenario(context, scenario)


def after_all(context):
    hooks.after_all(context)
