"""Pygame UI layer."""
from .camera import Viewport
from .presentation import Presentation, NullPresentation
from .input import InputController, PointerAdapter, DragStart, DragMove, DragEnd
from .renderer import PygameRenderer

__all__ = [
    'Viewport', 'Presentation', 'NullPresentation',
    'InputController', 'PointerAdapter', 'DragStart', 'DragMove', 'DragEnd',
    'PygameRenderer',
]
