#!/usr/bin/env python3
"""
Image to ASCII Frame Converter
==============================
Command line front end for the ascii_frame package.

Features:
- Density-ramp ASCII art with histogram equalization and contrast
- Truecolor, 256-color terminal palette or adaptive median-cut palettes
- Brightness-as-opacity and brightness blending
- Text, Markdown, HTML, ANSI and PNG output
- Animated image playback in the terminal
"""

import argparse
import logging
import sys
from typing import List, Optional

from PIL import Image, ImageDraw

from ascii_frame import (
    AnsiColorFormatter,
    AsciiFrameConverter,
    AsciiFrameError,
    CharacterSet,
    ColorMode,
    ConversionSettings,
    FrameStream,
    HtmlFormatter,
    MarkdownFormatter,
    Presets,
    RasterRenderer,
    TextFormatter,
    iter_image_frames,
    optimize_ramp,
    play_in_terminal,
)

logger = logging.getLogger('ascii_frame.cli')


# =============================================================================
# DEMO
# =============================================================================

def demo() -> None:
    """Demonstrate the converter on a generated image."""
    test_image = Image.new('RGB', (100, 100), color='white')
    draw = ImageDraw.Draw(test_image)
    draw.ellipse([10, 10, 90, 90], fill='red', outline='black')
    draw.rectangle([30, 30, 70, 70], fill='blue')

    converter = AsciiFrameConverter()

    print("1. Monochrome (standard ramp):")
    print(converter.convert_image(test_image, 40).text)

    print("\n2. Adaptive palette (4 colors):")
    settings = ConversionSettings(color_mode=ColorMode.ADAPTIVE, adaptive_colors=4)
    result = converter.convert_image(test_image, 40, settings)
    print(AnsiColorFormatter.format_result(result))
    print(f"Palette: {result.palette}")


# =============================================================================
# COMMAND LINE INTERFACE
# =============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description='Convert images to density-mapped ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                            # Basic conversion
  %(prog)s image.png -w 80                      # 80 characters per row
  %(prog)s image.png --color-mode truecolor     # 24-bit terminal colours
  %(prog)s image.png --color-mode adaptive16    # 16-colour median-cut palette
  %(prog)s image.png --preset colorful -o a.html
  %(prog)s anim.gif --play                      # Play an animation
        """
    )

    # Input/Output
    parser.add_argument('input', nargs='?', help='Input image file')
    parser.add_argument('-o', '--output', help='Output file (txt, md, html, ansi or png)')

    # Size options
    parser.add_argument('-w', '--width', type=int, default=100, help='Characters per row')
    parser.add_argument('--ratio', type=float, help='Character aspect ratio (width/height)')
    parser.add_argument('--mirror', action='store_true', default=None, help='Mirror horizontally')

    # Character set options
    parser.add_argument('--preset', choices=Presets.names(), help='Settings preset')
    parser.add_argument('--charset', choices=sorted(CharacterSet.presets()),
                        help='Named character set')
    parser.add_argument('--chars', help='Custom character string (dark to light)')
    parser.add_argument('--optimize-chars', type=int, metavar='N',
                        help='Sort characters by rendered density, keeping N of them (0 = all)')
    parser.add_argument('-i', '--invert', action='store_true', default=None, help='Invert brightness')

    # Contrast options
    parser.add_argument('--contrast', type=float, help='Contrast factor (1 = unchanged)')
    parser.add_argument('--histogram', action='store_true', default=None,
                        help='Histogram equalization')

    # Color options
    parser.add_argument('--color-mode',
                        help='monochrome, truecolor, ansi256 or adaptive<k> (e.g. adaptive16)')
    parser.add_argument('--saturation', type=float, help='Saturation (0 = gray, 1 = unchanged)')
    parser.add_argument('--blend', type=float, help='Brightness blend (0-1, 0.5 = neutral)')
    parser.add_argument('--opacity', type=float, help='Base opacity (0-1)')
    parser.add_argument('--brightness-opacity', action='store_true', default=None,
                        help='Derive opacity from brightness')
    parser.add_argument('--foreground', help='Monochrome colour as #rrggbb')
    parser.add_argument('--ansi', choices=['24bit', '256', '16'], default='24bit',
                        help='Terminal color encoding')

    # Rendering options
    parser.add_argument('--font-size', type=int, default=10, help='Font size for PNG/HTML output')
    parser.add_argument('--font', help='TrueType font file for PNG output')

    # Other options
    parser.add_argument('--play', action='store_true', help='Play animated input in the terminal')
    parser.add_argument('--delay', type=float, default=0.1, help='Seconds between played frames')
    parser.add_argument('--demo', action='store_true', help='Run demo')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    return parser


def build_settings(args: argparse.Namespace) -> ConversionSettings:
    """Start from the preset (or defaults) and apply explicit options."""
    settings = Presets.get(args.preset) if args.preset else ConversionSettings()

    changes = {}
    if args.chars:
        changes['density_ramp'] = args.chars
    elif args.charset:
        changes['density_ramp'] = CharacterSet.get_preset(args.charset)

    overrides = {
        'invert': args.invert,
        'contrast_factor': args.contrast,
        'use_histogram_eq': args.histogram,
        'saturation': args.saturation,
        'brightness_blend': args.blend,
        'base_opacity': args.opacity,
        'brightness_as_opacity': args.brightness_opacity,
        'aspect_ratio': args.ratio,
        'mirror': args.mirror,
        'foreground': args.foreground,
    }
    changes.update({key: value for key, value in overrides.items() if value is not None})

    if args.color_mode:
        mode, count = ColorMode.parse(args.color_mode)
        changes['color_mode'] = mode
        if count is not None:
            changes['adaptive_colors'] = count

    settings = settings.replace(**changes)

    if args.optimize_chars is not None:
        settings = settings.replace(
            density_ramp=optimize_ramp(settings.density_ramp, args.optimize_chars, args.font)
        )

    return settings


def write_output(path: str, result, settings: ConversionSettings, args: argparse.Namespace) -> None:
    """Write a result in the format implied by the file extension."""
    ext = path.lower().rsplit('.', 1)[-1]

    if ext == 'png':
        renderer = RasterRenderer(args.font_size, args.font, settings.aspect_ratio)
        renderer.save_png(result, path, settings)
        return

    if ext == 'html':
        fg = '#{:02x}{:02x}{:02x}'.format(*settings.foreground)
        content = HtmlFormatter.format_result(result, font_size=f"{args.font_size}px",
                                              foreground_color=fg, document=True)
    elif ext == 'ansi':
        content = AnsiColorFormatter.format_result(result, color_mode=args.ansi)
    elif ext == 'md':
        content = MarkdownFormatter.format_result(result)
    else:
        content = TextFormatter.format_result(result)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info("Saved to %s", path)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.demo:
        demo()
        return 0

    if not args.input:
        parser.print_help()
        return 0

    try:
        settings = build_settings(args)
    except (AsciiFrameError, ValueError) as e:
        logger.error("Invalid settings: %s", e)
        return 1

    try:
        with Image.open(args.input) as image:
            logger.debug("Loaded image: %s, size %s, mode %s", args.input, image.size, image.mode)
            if args.play and getattr(image, 'n_frames', 1) > 1:
                stream = FrameStream(args.width, settings)
                frames = stream.convert_all(iter_image_frames(image))
            else:
                frames = None
                result = AsciiFrameConverter(settings).convert_image(image, args.width)
    except OSError as e:
        logger.error("Error loading image: %s", e)
        return 1
    except AsciiFrameError as e:
        logger.error("Conversion failed: %s", e)
        return 1

    if frames is not None:
        play_in_terminal(frames, delay=args.delay, color_mode=args.ansi)
        return 0

    logger.debug("Output size: %dx%d in %.1f ms", result.width, result.height, result.duration * 1000)

    if args.output:
        write_output(args.output, result, settings, args)
    elif result.cell_styles is not None:
        print(AnsiColorFormatter.format_result(result, color_mode=args.ansi))
    else:
        print(result.text)

    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
