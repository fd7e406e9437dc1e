"""Pieces of a small shell: environment lists, builtins, redirection files and pipeline execution."""

__version__ = "0.1.0"

__all__ = ["types", "envp", "builtins", "files", "execution"]