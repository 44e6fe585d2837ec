"""
Rendering collaborators for generated maps.
"""

from .base import Renderer, RecordingRenderer

__all__ = ['Renderer', 'RecordingRenderer']
