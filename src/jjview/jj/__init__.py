"""jj interface layer — command runner, output parsers, models."""

from jjview.jj.adapter import (
    JjError,
    JjRunner,
    Runner,
    ensure_jj,
    execute_command,
    get_default_command,
    get_log_text,
    get_repo_root,
    get_status_text,
)
from jjview.jj.models import ChangeIdentity, DiffCategory, FileInfo, StatusFile, StatusSummary
from jjview.jj.status_parser import (
    get_rev_from_log_line,
    get_status_files,
    parse_default_command,
    parse_file_info,
    parse_status,
)

__all__ = [
    "ChangeIdentity",
    "DiffCategory",
    "FileInfo",
    "JjError",
    "JjRunner",
    "Runner",
    "StatusFile",
    "StatusSummary",
    "ensure_jj",
    "execute_command",
    "get_default_command",
    "get_log_text",
    "get_repo_root",
    "get_rev_from_log_line",
    "get_status_files",
    "get_status_text",
    "parse_default_command",
    "parse_file_info",
    "parse_status",
]
