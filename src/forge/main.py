#!/usr/bin/env python3
"""Command line entry point for Forge."""

import sys
import logging
import argparse
from typing import List, Optional

from .settings import SETTINGS
from .editor import ImageEditor

RESIZE_MODES = ["filter", "adaptive", "sample", "scale", "thumbnail"]


def setup_logging(args: argparse.Namespace) -> None:
    """Configure logging from settings and the debug/verbose flags."""
    level = getattr(logging, SETTINGS["system"].LOG_LEVEL, logging.INFO)

    if args.debug:
        level = logging.DEBUG
        SETTINGS["system"].DEBUG_MODE = True
        SETTINGS["system"].DISPLAY_PROCESSING_TIME = True
    elif args.verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def load_editor(input_file: str) -> ImageEditor:
    """Load an image or exit with the editor's error message."""
    editor = ImageEditor(input_file)
    if not editor.is_loaded:
        print(editor.get_error_message(), file=sys.stderr)
        sys.exit(1)
    return editor


def apply_operations(editor: ImageEditor, args: argparse.Namespace) -> ImageEditor:
    """Apply the requested edits in their fixed order."""
    if args.crop:
        editor.crop(*args.crop)
    if args.crop_to:
        editor.crop_to(*args.crop_to)
    if args.crop_square:
        editor.crop_square()

    if args.resize:
        height, width = args.resize
        if args.resize_mode == "adaptive":
            editor.resize_adaptive(height, width)
        elif args.resize_mode == "sample":
            editor.resize_sample(height, width)
        elif args.resize_mode == "scale":
            editor.resize_scale(height, width)
        elif args.resize_mode == "thumbnail":
            editor.resize_thumbnail(height, width)
        else:
            editor.resize(height, width, args.filter, args.blur)

    if args.rotate is not None:
        editor.rotate(args.rotate)
    if args.modulate:
        editor.modulate(*args.modulate)
    if args.unsharp:
        editor.unsharp(*args.unsharp)

    return editor


def cmd_edit(args: argparse.Namespace) -> None:
    """Edit an image file and write or print the result."""
    editor = load_editor(args.input_file)
    apply_operations(editor, args)

    if args.output:
        if not editor.save(args.quality, args.output):
            print(editor.get_error_message(), file=sys.stderr)
            sys.exit(1)
        height, width = editor.dimensions
        print(f"Saved {width}x{height} image as {args.output}", file=sys.stderr)
    else:
        sys.stdout.buffer.write(editor.save(args.quality))
        sys.stdout.flush()

    if SETTINGS["system"].DEBUG_MODE:
        for name, time_taken in editor.get_operation_timings().items():
            print(f"  {name}: {time_taken:.3f}s", file=sys.stderr)


def cmd_info(args: argparse.Namespace) -> None:
    """Display image information and editor configuration."""
    editor = load_editor(args.input_file)
    height, width = editor.dimensions
    image = editor.get_image()

    print(f"Image: {args.input_file}")
    print(f"  Size: {width}x{height}")
    print(f"  Mode: {image.mode}")
    print(f"  Format: {editor.format}")

    editor_settings = SETTINGS["editor"]
    print("\nEditor Configuration:")
    print(f"  Default Quality: {editor_settings.DEFAULT_QUALITY}")
    print(f"  Default Format: {editor_settings.DEFAULT_FORMAT}")
    print(f"  Default Filter: {editor_settings.DEFAULT_FILTER}")
    print(f"  Fallback Filter: {editor_settings.FALLBACK_FILTER}")

    editor.close()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description='Forge - crop, resize, rotate, sharpen and modulate images'
    )

    # Global options
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Edit command
    edit_parser = subparsers.add_parser('edit', help='Apply edits to an image file')
    edit_parser.add_argument('input_file', help='Input image file path')
    edit_parser.add_argument('--output', '-o', help='Output path; encoded bytes go to stdout if omitted')
    edit_parser.add_argument('--quality', '-q', type=int, default=SETTINGS["editor"].DEFAULT_QUALITY,
                             help='Save quality for lossy formats (1-99)')
    edit_parser.add_argument('--crop', type=int, nargs=4, metavar=('TOP', 'RIGHT', 'BOTTOM', 'LEFT'),
                             help='Remove pixels from each edge')
    edit_parser.add_argument('--crop-to', type=int, nargs=2, metavar=('HEIGHT', 'WIDTH'),
                             help='Centre-crop to exact dimensions')
    edit_parser.add_argument('--crop-square', action='store_true',
                             help='Crop to the largest top-aligned square')
    edit_parser.add_argument('--resize', type=int, nargs=2, metavar=('HEIGHT', 'WIDTH'),
                             help='Resize keeping the aspect ratio (0 infers a side)')
    edit_parser.add_argument('--resize-mode', choices=RESIZE_MODES, default='filter',
                             help='Resize algorithm')
    edit_parser.add_argument('--filter', default=SETTINGS["editor"].DEFAULT_FILTER,
                             help='Resampling filter for --resize-mode filter')
    edit_parser.add_argument('--blur', type=float, default=SETTINGS["editor"].DEFAULT_BLUR,
                             help='Blur factor for --resize-mode filter (>1 softens)')
    edit_parser.add_argument('--rotate', type=float, metavar='DEGREES',
                             help='Rotate clockwise')
    edit_parser.add_argument('--modulate', type=float, nargs=3,
                             metavar=('BRIGHTNESS', 'SATURATION', 'HUE'),
                             help='Modulate as percentages (100 = unchanged)')
    edit_parser.add_argument('--unsharp', type=float, nargs=4,
                             metavar=('RADIUS', 'SIGMA', 'AMOUNT', 'THRESHOLD'),
                             help='Apply an unsharp mask')
    edit_parser.set_defaults(func=cmd_edit)

    # Info command
    info_parser = subparsers.add_parser('info', help='Display image information and configuration')
    info_parser.add_argument('input_file', help='Input image file path')
    info_parser.set_defaults(func=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    setup_logging(args)

    # Call the appropriate command function
    args.func(args)


if __name__ == '__main__':
    main()
