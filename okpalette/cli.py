"""Command-line palette generator.

Usage:
    python -m okpalette "#3366CC" --shades 5 --luminance linear
    python -m okpalette "#3366CC" --hue sine --param hue.k=1.2 --names --png ramp.png
    python -m okpalette --load palette.json --publish
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from okpalette import defaults
from okpalette.app.session import PaletteSession
from okpalette.colorspace import hex_to_rgb
from okpalette.export import save_swatches
from okpalette.host.memory import InMemoryHost, LoopbackChannel
from okpalette.host.plugin import PalettePlugin
from okpalette.naming import generate_palette_color_names
from okpalette.serialization import StateLoadError, load_state, palette_to_dict, save_state
from okpalette.types import Channel, CurveKind

logger = logging.getLogger(__name__)

_CURVE_CHOICES = [kind.value.lower() for kind in CurveKind]


def _split_assignment(text: str, sep: str) -> tuple[str, str, str]:
    """Split ``channel<sep>key=value``; raises ValueError on bad syntax."""
    target, _, value = text.partition("=")
    channel, _, key = target.partition(sep)
    if not channel or not key or not value:
        raise ValueError(text)
    return channel, key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="okpalette",
        description="Generate an OKLCH shade ramp from a base color.",
    )
    parser.add_argument("base", nargs="?", help="Base color as hex, e.g. '#3366CC'")
    parser.add_argument("--shades", type=int, default=None,
                        help=f"Number of shades ({defaults.MIN_SHADE_COUNT}-{defaults.MAX_SHADE_COUNT})")
    for channel in Channel:
        parser.add_argument(f"--{channel.value.lower()}", choices=_CURVE_CHOICES, default=None,
                            help=f"Curve driving {channel.value.lower()}")
    parser.add_argument("--param", action="append", default=[], metavar="CHANNEL.NAME=VALUE",
                        help="Curve parameter, e.g. luminance.m=0.8")
    parser.add_argument("--manual", action="append", default=[], metavar="CHANNEL:INDEX=VALUE",
                        help="Manual shade value, e.g. chroma:3=0.2 (disables that channel's curve)")
    parser.add_argument("--names", action="store_true", help="Print library asset names")
    parser.add_argument("--json", type=Path, default=None, help="Write colors as JSON")
    parser.add_argument("--png", type=Path, default=None, help="Write a swatch image")
    parser.add_argument("--save", type=Path, default=None, help="Save the palette state")
    parser.add_argument("--load", type=Path, default=None, help="Start from a saved palette state")
    parser.add_argument("--publish", action="store_true",
                        help="Publish to an in-memory host document and report the outcome")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def apply_arguments(session: PaletteSession, args: argparse.Namespace) -> None:
    """Drive the session with the parsed arguments.

    Raises:
        ValueError: If an argument cannot be applied.
    """
    if args.base is not None:
        hex_to_rgb(args.base)
        session.set_base_color_hex(args.base)
    if args.shades is not None:
        session.set_shade_count(args.shades)

    for channel in Channel:
        curve = getattr(args, channel.value.lower())
        if curve is not None:
            session.select_channel(channel)
            session.toggle_curve(curve)

    for text in args.param:
        channel, name, value = _split_assignment(text, ".")
        session.select_channel(Channel(channel.capitalize()))
        before = session.state
        if session.set_curve_param(name, value) is before:
            raise ValueError(f"Parameter not applied: {text}")

    for text in args.manual:
        channel, index, value = _split_assignment(text, ":")
        session.select_channel(Channel(channel.capitalize()))
        before = session.state
        if session.set_shade_value(int(index), value) is before:
            raise ValueError(f"Manual value not applied: {text}")


def publish(session: PaletteSession) -> InMemoryHost:
    """Send the palette through the host protocol to an in-memory document."""
    host = InMemoryHost()
    plugin = PalettePlugin(host)
    channel = LoopbackChannel(to_host=plugin.handle_message, to_ui=session.handle_host_message)
    host.on_send = channel.post_to_ui
    session.connect(channel.post_to_host)
    session.set_create_assets(True)
    session.add_palette()
    delivered = channel.pump()
    logger.debug("Delivered %d messages", delivered)
    return host


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.base is None and args.load is None:
        parser.error("a base color or --load is required")

    try:
        state = load_state(args.load) if args.load is not None else None
    except (OSError, StateLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = PaletteSession(state=state)
    try:
        apply_arguments(session, args)
    except ValueError as e:
        print(f"Error: invalid argument: {e}", file=sys.stderr)
        return 2

    state = session.state
    names = generate_palette_color_names(state.colors) if args.names else None
    for i, shade in enumerate(state.shades):
        line = f"{shade.hex}  L={shade.l:.3f} C={shade.c:.3f} H={shade.h:.1f}"
        if names is not None:
            line += f"  {names[i]}"
        print(line)

    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(json.dumps(palette_to_dict(state, names), indent=2))
    if args.png is not None:
        save_swatches(state.colors, args.png)
    if args.save is not None:
        save_state(state, args.save)

    if args.publish:
        host = publish(session)
        result = session.last_result
        if result is None or not result.success:
            print(f"Publish failed: {result.error if result else 'no response'}", file=sys.stderr)
            return 1
        print(result.message)
        for name, color in host.library.items():
            print(f"{name} {color}")

    return 0
