"""
Shared helpers: command execution, logging, file and HTTP utilities, and the
task orchestrator.
"""
