# Utility modules
# - log_sink: tagged log lines shared by the core modules
# - error_log: persistent per-batch error log file

from foldersort_app.utils.error_log import ErrorLogger
from foldersort_app.utils.log_sink import emit, format_line, split_level

__all__ = [
    "ErrorLogger",
    "emit",
    "format_line",
    "split_level",
]
