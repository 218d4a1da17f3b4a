"""Renderer backed by the Graphviz command line tools."""

import re

import graphviz
import structlog

from org_graph.errors import ErrorInfo, ErrorLevel, RenderError
from org_graph.renderer import Renderer

logger = structlog.get_logger()

_DIAGNOSTIC = re.compile(r"^(Error|Warning)\s*:\s*(.*)$", re.IGNORECASE)
_LINE = re.compile(r"\bline (\d+)\b")


def parse_diagnostics(stderr: str) -> list[ErrorInfo]:
    """Parse Graphviz stderr output into structured diagnostics.

    Args:
        stderr: Text written by the Graphviz executable

    Returns:
        One ErrorInfo per diagnostic line; other lines are treated as info
    """
    errors = []
    for raw in stderr.splitlines():
        text = raw.strip()
        if not text:
            continue

        match = _DIAGNOSTIC.match(text)
        if match:
            level = ErrorLevel.ERROR if match.group(1).lower() == "error" else ErrorLevel.WARNING
            message = match.group(2)
        else:
            level = ErrorLevel.INFO
            message = text

        line_match = _LINE.search(message)
        line = int(line_match.group(1)) if line_match else None
        errors.append(ErrorInfo(level=level, message=message, line=line))
    return errors


class GraphvizRenderer(Renderer):
    """Renders DOT by piping it through a Graphviz layout engine."""

    def __init__(self, engine: str = "dot", fmt: str = "svg") -> None:
        """Initialize Graphviz renderer.

        Args:
            engine: Graphviz layout engine (dot, neato, fdp, ...)
            fmt: Output format understood by Graphviz
        """
        self.engine = engine
        self.fmt = fmt
        logger.debug("Initializing Graphviz renderer", engine=engine, fmt=fmt)

    def _pipe(self, dot: str) -> bytes:
        logger.debug("Rendering DOT", engine=self.engine, fmt=self.fmt, length=len(dot))
        try:
            output = graphviz.pipe(self.engine, self.fmt, dot.encode("utf-8"))
        except graphviz.ExecutableNotFound as e:
            logger.error("Graphviz executable not found", engine=self.engine)
            raise RenderError([ErrorInfo(level=ErrorLevel.ERROR, message=str(e))]) from e
        except graphviz.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace") if isinstance(e.stderr, bytes) else e.stderr or ""
            errors = parse_diagnostics(stderr)
            logger.error("Graphviz rejected DOT", returncode=e.returncode, errors=len(errors))
            raise RenderError(errors) from e

        logger.debug("Rendered DOT", output_length=len(output))
        return output

    def render(self, dot: str) -> str:
        """Render DOT to a text format such as svg, plain or json.

        Raises:
            RenderError: If Graphviz fails or the output is not UTF-8 text
        """
        output = self._pipe(dot)
        try:
            return output.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RenderError(
                [ErrorInfo(level=ErrorLevel.ERROR, message=f"{self.fmt} output is binary, use render_bytes")]
            ) from e

    def render_bytes(self, dot: str) -> bytes:
        """Render DOT to raw output bytes, for binary formats such as png or pdf."""
        return self._pipe(dot)
