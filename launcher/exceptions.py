# launcher/exceptions.py
# -*- coding: utf-8 -*-
"""
Exceptions raised by the launcher's fatal stages.
"""


class LauncherError(Exception):
    """Base class for launcher failures that abort the bootstrap."""


class PreflightError(LauncherError):
    """A precondition for starting the stack is not met."""


class StackError(LauncherError):
    """A docker compose operation that must succeed did not."""
