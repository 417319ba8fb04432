"""Shared utilities for resorter-admin.

Import directly from submodules:
    from resorter_admin.utils.file_helpers import read_model_file
"""

__all__: list[str] = []
