"""
Output Package

PDF rendering of laid-out forms.
"""

from .renderer import RenderError, render_to_pdf

__all__ = ["RenderError", "render_to_pdf"]
