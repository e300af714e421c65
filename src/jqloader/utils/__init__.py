"""
jqloader utilities package
"""

from .io_utils import read_source_file, open_data_file
from .config import expand_search_path, default_search_paths

__all__ = ["read_source_file", "open_data_file", "expand_search_path", "default_search_paths"]
