# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for managing and executing sequences of tasks.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

SETTINGS_CONTEXT_KEY = "app_settings"


class Orchestrator:
    """A centralized orchestrator to run a series of defined tasks."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for tasks to pass state between each other
        self.context: Dict[str, Any] = {}

    @property
    def current_settings(self) -> Any:
        """Settings handed to the next task. A task may replace them via the context."""
        return self.context.get(SETTINGS_CONTEXT_KEY, self.app_settings)

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
        fatal: bool = True,
    ):
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: The function to execute for this task.
            args: A list of positional arguments to pass to the function.
            kwargs: A dictionary of keyword arguments to pass to the function.
            fatal: If True, a failure in this task will halt the entire orchestration.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
            "fatal": fatal,
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added tasks in sequence.

        A failing fatal task exits the process with status 1. A failing
        non-fatal task is logged and the next task runs.

        Returns:
            True if every task completed, False if a non-fatal task failed.
        """
        self.logger.debug("Orchestration started.")
        all_succeeded = True
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.debug(
                f"--- Stage {i + 1}: Running task '{task_name}' ---"
            )

            try:
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.current_settings

                result = task["func"](*task["args"], **task["kwargs"])

                self.context[f"{task_name}_result"] = result

                self.logger.debug(f"Task '{task_name}' completed.")

            except Exception as e:
                if task.get("fatal", True):
                    self.logger.critical(f"🔥 {task_name} failed: {e}")
                    self.logger.debug("Traceback:", exc_info=True)
                    self.logger.error(
                        "A fatal error occurred. Halting orchestration and exiting application."
                    )
                    sys.exit(1)
                self.logger.warning(
                    f"Task '{task_name}' failed: {e}. Continuing orchestration.",
                    exc_info=self.logger.isEnabledFor(logging.DEBUG),
                )
                all_succeeded = False

        self.logger.debug("Orchestration finished.")
        return all_succeeded
