"""
Archon launcher.

Bootstraps the local Supabase + Archon Docker Compose stack: preflight checks,
support-file fetch, compose lifecycle, health polling and a migration probe.
"""

__version__ = "0.1.0"
