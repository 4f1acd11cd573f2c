"""Renderers turn positioned rooms into output documents."""

from roommap.renderers.base import Renderer
from roommap.renderers.svg import SvgRenderer, render_svg

__all__ = ["Renderer", "SvgRenderer", "render_svg"]
