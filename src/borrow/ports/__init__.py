"""Ports used by the start pipeline."""

from .git import CloneDestinationExistsError, CloneError, DEFAULT_CLONE_BRANCH, GitCloner
from .prompt import Prompter

__all__ = ["CloneDestinationExistsError", "CloneError", "DEFAULT_CLONE_BRANCH", "GitCloner", "Prompter"]
