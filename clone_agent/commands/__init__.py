"""Command implementations invoked by the CLI."""

from .projects_clone import CloneResult, DEFAULT_APIS, run_projects_clone

__all__ = ["CloneResult", "DEFAULT_APIS", "run_projects_clone"]
