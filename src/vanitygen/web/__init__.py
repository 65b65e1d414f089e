"""
Static site output helpers.
"""

from .site import DEFAULT_OUTPUT_DIR, SiteReport, page_targets, resolve_output_dir, write_site

__all__ = ["DEFAULT_OUTPUT_DIR", "SiteReport", "page_targets", "resolve_output_dir", "write_site"]
