"""Scan evaluators.

Each module exposes one pure function from retrieved data plus intent to a
CheckResult. Evaluators never touch the network and never share state.
"""

from scanner.checks.access_control import check_access_control
from scanner.checks.content_structure import check_content_structure
from scanner.checks.discovery_files import check_ai_discovery_files
from scanner.checks.http_headers import check_http_headers
from scanner.checks.meta_directives import check_meta_directives
from scanner.checks.response_stability import check_response_stability
from scanner.checks.robots_txt import check_robots_txt

__all__ = [
    "check_access_control",
    "check_ai_discovery_files",
    "check_content_structure",
    "check_http_headers",
    "check_meta_directives",
    "check_response_stability",
    "check_robots_txt",
]
