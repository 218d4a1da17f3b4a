"""Renderer interface for turning DOT text into images."""

from abc import ABC, abstractmethod


class Renderer(ABC):
    """Abstract base class for DOT rendering engines."""

    @abstractmethod
    def render(self, dot: str) -> str:
        """Render DOT source to image text (such as SVG).

        Raises:
            RenderError: If the engine rejects the document
        """
        pass
