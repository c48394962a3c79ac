#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/base.py
"""Base class for LaTeX AST renderers.

Every printer takes a tree (normally already passed through
:func:`latexfmt.ast.normalize.remove_excess_space`) and produces text.
Subclasses implement :meth:`BaseRenderer.render_to_string`; writing to a
path or stream is shared.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from latexfmt.ast.nodes import Node
from latexfmt.exceptions import FileError, InvalidOptionsError
from latexfmt.options.base import BasePrinterOptions


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BasePrinterOptions or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: BasePrinterOptions | None = None):
        self.options = options

    @abstractmethod
    def render_to_string(self, root: Node) -> str:
        """Render the tree to a string.

        Parameters
        ----------
        root : Node
            Tree to render

        Returns
        -------
        str
            Formatted LaTeX

        Raises
        ------
        MalformedNodeError
            If the tree contains a value that is not a latexfmt node.

        """

    def render(self, root: Node, output: Union[str, Path, IO[str], IO[bytes]]) -> None:
        """Render the tree and write it to a file path or stream.

        Parameters
        ----------
        root : Node
            Tree to render
        output : str, Path, IO[str] or IO[bytes]
            Destination. Binary streams receive UTF-8.

        Raises
        ------
        FileError
            If a path cannot be written.

        """
        self.write_text_output(self.render_to_string(root), output)

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[str], IO[bytes]]) -> None:
        """Write ``text`` to a path, a text stream or a binary stream.

        Raises
        ------
        FileError
            If a path cannot be written.

        """
        if isinstance(output, (str, Path)):
            try:
                Path(output).write_text(text, encoding="utf-8")
            except OSError as e:
                raise FileError(f"Cannot write {output}: {e}", file_path=str(output), original_error=e) from e
            return

        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]

    @staticmethod
    def _validate_options_type(options: BasePrinterOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that ``options`` is an instance of ``expected_type``.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type.

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                f"{renderer_name} renderer expects {expected_type.__name__}, got {type(options).__name__}",
                expected_type=expected_type,
                received_type=type(options),
            )
