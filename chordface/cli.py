#!/usr/bin/env python3
"""Unified CLI for chordface - a chord-star watch face."""

import argparse
import logging

from .base import add_common_args, common_args_from_parsed
from .config import InvalidConfig, apply_message, format_color
from .face import FaceRenderer, local_time
from .settings import DEFAULT_SETTINGS_PATH, SettingsStore

# argparse dest -> FaceConfig field
_CONFIG_OPTIONS = {
    'vertex_count': 'vertex_count',
    'vertex_shift': 'vertex_shift',
    'background': 'background_color',
    'line': 'line_color',
    'hour_color': 'hour_color',
    'min_color': 'min_color',
}


def parse_clock(text):
    """'HH:MM' -> (hour, minute)."""
    try:
        hour_str, minute_str = text.split(':', 1)
        hour, minute = int(hour_str), int(minute_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected HH:MM, got '{text}'") from None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise argparse.ArgumentTypeError(f"time out of range: '{text}'")
    return hour, minute


def add_face_args(parser):
    """Options that make up a configuration message."""
    parser.add_argument("--settings", default=str(DEFAULT_SETTINGS_PATH),
                        help="Settings file")
    parser.add_argument("-n", "--vertex-count", type=int, default=None,
                        help="Number of polygon vertices (>= 3)")
    parser.add_argument("-s", "--vertex-shift", type=int, default=None,
                        help="Index offset between the two ends of a chord")
    parser.add_argument("--background", default=None,
                        help="Background color, e.g. '#ffffff'")
    parser.add_argument("--line", default=None,
                        help="Chord color")
    parser.add_argument("--hour-color", default=None,
                        help="Hour marker color")
    parser.add_argument("--min-color", default=None,
                        help="Minute marker color")


def config_message_from_parsed(args):
    """Collect the config options that were given on the command line."""
    return {field: getattr(args, dest)
            for dest, field in _CONFIG_OPTIONS.items()
            if getattr(args, dest, None) is not None}


def _create_renderer(args, persist=False):
    """Load persisted settings and apply command-line overrides on top."""
    store = SettingsStore(args.settings)
    config = store.load()
    message = config_message_from_parsed(args)
    fixed_time = getattr(args, 'time', None)
    renderer = FaceRenderer(
        config=config,
        time_source=(lambda: fixed_time) if fixed_time else local_time,
        store=store if persist else None,
    )
    if message:
        if persist:
            renderer.apply_config(message)
        else:
            renderer.set_config(apply_message(config, message))
    return renderer


def _create_player(args):
    """Build the scope player for `args`. Shared with the interactive REPL."""
    from .clock import FacePlayer
    return FacePlayer(renderer=_create_renderer(args), **common_args_from_parsed(args))


def build_parser():
    parser = argparse.ArgumentParser(
        prog='chordface',
        description='Chord-star watch face: stream it to an oscilloscope '
                    'or render it to an image.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Scope subcommand
    scope_parser = subparsers.add_parser(
        'scope',
        help='Stream the face to an oscilloscope in XY mode',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    scope_parser.add_argument("-i", "--interactive", action="store_true",
                              help="Interactive mode: change config with key=value")
    add_face_args(scope_parser)
    add_common_args(scope_parser, secs_default=0.02)

    # Render subcommand
    render_parser = subparsers.add_parser(
        'render',
        help='Render one frame to an image file',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    render_parser.add_argument("out", help="Output image (e.g. face.png)")
    render_parser.add_argument("--time", type=parse_clock, default=None,
                               help="Show this time (HH:MM) instead of now")
    render_parser.add_argument("--size", type=int, nargs=2, default=(144, 168),
                               metavar=('W', 'H'), help="Image size in pixels")
    render_parser.add_argument("--dpi", type=int, default=100,
                               help="Figure DPI")
    add_face_args(render_parser)

    # WAV subcommand
    wav_parser = subparsers.add_parser(
        'wav',
        help='Write one frame as an XY stereo WAV file',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    wav_parser.add_argument("out", help="Output WAV file")
    wav_parser.add_argument("--time", type=parse_clock, default=None,
                            help="Show this time (HH:MM) instead of now")
    add_face_args(wav_parser)
    add_common_args(wav_parser, secs_default=0.02)

    # Config subcommand
    config_parser = subparsers.add_parser(
        'config',
        help='Update and show the persisted settings',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_face_args(config_parser)

    return parser


def print_config(config):
    for name, value in config.to_dict().items():
        if name.endswith('_color'):
            value = format_color(value)
        print(f"  {name:<20s}{value}")


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == 'config':
            renderer = _create_renderer(args, persist=True)
            print(f"Settings: {args.settings}")
            print_config(renderer.config)
            return 0

        if args.command == 'render':
            from .canvas import ImageCanvas
            renderer = _create_renderer(args)
            canvas = ImageCanvas(*args.size, dpi=args.dpi)
            renderer.redraw(canvas)
            canvas.save(args.out)
            print(f"Wrote {args.out} ({args.size[0]}x{args.size[1]})")
            return 0

        if args.command == 'wav':
            from .clock import generate_wav
            generate_wav(_create_renderer(args), args.out, rate=args.rate,
                         secs=args.secs, amp=args.amp)
            return 0

        if args.command == 'scope':
            if args.interactive:
                from .interactive import InteractiveSession
                InteractiveSession(args).run()
                return 0
            _create_player(args).run()
            return 0
    except InvalidConfig as e:
        print(f"Invalid configuration: {e}")
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
