"""Loading sequence and result rendering."""

from propstradamus.presentation.controller import PresentationController, PresentationState, ViewKind
from propstradamus.presentation.render import render_progress, render_view

__all__ = ["PresentationController", "PresentationState", "ViewKind", "render_progress", "render_view"]
