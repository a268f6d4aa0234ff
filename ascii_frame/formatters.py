#!/usr/bin/env python3
"""
ASCII Frame Converter - Output Formatters
=========================================
Text, Markdown, HTML and ANSI terminal renderings of a ConversionResult.
All coloured formats emit one style change per run, not per cell.
"""

from typing import Literal, Tuple

from ascii_frame.constants import ANSI_256
from ascii_frame.markup import Run, escape_markup, iter_row_runs, render_markup
from ascii_frame.pipeline import ConversionResult
from ascii_frame.quantizer import nearest_index

RGB = Tuple[int, int, int]

_ANSI_SYSTEM = ANSI_256[:16]
_ANSI_EXTENDED_OFFSET = 16
_ANSI_EXTENDED = ANSI_256[_ANSI_EXTENDED_OFFSET:]


# =============================================================================
# PLAIN TEXT
# =============================================================================

class TextFormatter:
    """Plain character grid."""

    @staticmethod
    def format_result(result: ConversionResult) -> str:
        return result.text


class MarkdownFormatter:
    """Character grid in a fenced code block."""

    @staticmethod
    def format_result(result: ConversionResult) -> str:
        return '```\n' + result.text + '\n```'


# =============================================================================
# ANSI COLOR OUTPUT
# =============================================================================

class AnsiColorFormatter:
    """Format ASCII art with ANSI color codes for terminal output."""

    # ANSI escape codes
    RESET = "\033[0m"

    @staticmethod
    def rgb_to_ansi_24bit(r: int, g: int, b: int, foreground: bool = True) -> str:
        """Convert RGB to 24-bit ANSI color code (true color)."""
        code = 38 if foreground else 48
        return f"\033[{code};2;{r};{g};{b}m"

    @staticmethod
    def rgb_to_ansi_256(r: int, g: int, b: int, foreground: bool = True) -> str:
        """
        256-color code of the nearest cube or grayscale entry.

        The 16 system colours are skipped since terminals theme them.
        """
        color = _ANSI_EXTENDED_OFFSET + nearest_index(r, g, b, _ANSI_EXTENDED)
        code = 38 if foreground else 48
        return f"\033[{code};5;{color}m"

    @staticmethod
    def rgb_to_ansi_16(r: int, g: int, b: int, foreground: bool = True) -> str:
        """16-color code of the nearest system colour."""
        color = nearest_index(r, g, b, _ANSI_SYSTEM)
        bright, color = divmod(color, 8)
        if foreground:
            code = (90 if bright else 30) + color
        else:
            code = (100 if bright else 40) + color
        return f"\033[{code}m"

    @staticmethod
    def composite(run: Run, background: RGB) -> RGB:
        """Blend a run's colour over the background by its opacity."""
        r, g, b, alpha = run.style
        return tuple(
            int(c * alpha + bg * (1 - alpha) + 0.5)
            for c, bg in zip((r, g, b), background)
        )

    @classmethod
    def format_result(cls, result: ConversionResult,
                      color_mode: Literal['24bit', '256', '16'] = '24bit',
                      background: RGB = (0, 0, 0)) -> str:
        """
        Format a conversion result with ANSI colors.

        Args:
            result: ConversionResult, plain text is returned when it has no styles
            color_mode: Color mode ('24bit', '256', or '16')
            background: Terminal background that translucent cells blend into

        Returns:
            String with ANSI color codes
        """
        if result.cell_styles is None:
            return result.text

        if color_mode == '24bit':
            encode = cls.rgb_to_ansi_24bit
        elif color_mode == '256':
            encode = cls.rgb_to_ansi_256
        else:
            encode = cls.rgb_to_ansi_16

        output_lines = []
        for runs in iter_row_runs(result.lines, result.cell_styles):
            output = []
            prev_code = None
            for run in runs:
                code = encode(*cls.composite(run, background))
                # Neighbouring runs can collapse to the same terminal colour
                if code != prev_code:
                    output.append(code)
                    prev_code = code
                output.append(run.text)
            output.append(cls.RESET)
            output_lines.append(''.join(output))

        return '\n'.join(output_lines)


# =============================================================================
# HTML OUTPUT
# =============================================================================

class HtmlFormatter:
    """Format ASCII art as HTML with styling."""

    @staticmethod
    def format_result(result: ConversionResult,
                      font_size: str = "10px",
                      font_family: str = "monospace",
                      background_color: str = "#0d0d0d",
                      foreground_color: str = "#f0f0f0",
                      document: bool = False) -> str:
        """
        Format a conversion result as an HTML fragment or page.

        Args:
            result: ConversionResult with optional cell styles
            font_size: CSS font size
            font_family: CSS font family
            background_color: Background color
            foreground_color: Text color when the result has no cell styles
            document: Wrap the fragment in a complete HTML page

        Returns:
            HTML string
        """
        base_styles = (
            f"font-family: {font_family}; font-size: {font_size}; line-height: 1; "
            f"letter-spacing: 0; white-space: pre; background-color: {background_color}; "
            f"padding: 16px; margin: 0; display: inline-block;"
        )

        if result.cell_styles is None:
            body = escape_markup(render_markup(result.lines))
            fragment = f'<pre style="{base_styles} color: {foreground_color};">{body}</pre>'
        else:
            fragment = f'<pre style="{base_styles}">{result.to_markup()}</pre>'

        if not document:
            return fragment

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="background-color: {background_color};">
{fragment}
</body>
</html>"""
