"""
Template rendering for the index and project pages.
"""

from .templates import ProjectPage, RenderedSet, VanityLink, render_index, render_project

__all__ = ["ProjectPage", "RenderedSet", "VanityLink", "render_index", "render_project"]
