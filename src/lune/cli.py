from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone


def _parse_when(s: str) -> datetime:
    """ISO-8601 instant; a trailing 'Z' means UTC and naive values are taken as UTC."""
    text = s.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 date/time: {s!r}") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _fmt(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def cmd_phase(argv: list[str]) -> int:
    import lune

    p = argparse.ArgumentParser(prog="lune phase", description="Lunar phase, illumination and distances at an instant.")
    p.add_argument("when", nargs="?", type=_parse_when, default=None, help="ISO-8601 instant (default: now)")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    args = p.parse_args(argv)

    info = lune.phase(args.when)
    if args.json:
        print(json.dumps(dataclasses.asdict(info), indent=2))
        return 0

    print(f"Phase                 = {info.phase:.6f}")
    print(f"Illuminated           = {info.illuminated:.6f}")
    print(f"Age (days)            = {info.age:.4f}")
    print(f"Distance (km)         = {info.distance:.1f}")
    print(f"Angular diameter      = {info.angular_diameter:.6f} deg")
    print(f"Sun distance (km)     = {info.sun_distance:.1f}")
    print(f"Sun angular diameter  = {info.sun_angular_diameter:.6f} deg")
    return 0


def cmd_hunt(argv: list[str]) -> int:
    import lune

    p = argparse.ArgumentParser(prog="lune hunt", description="Quarter phases of the lunation containing an instant.")
    p.add_argument("when", nargs="?", type=_parse_when, default=None, help="ISO-8601 instant (default: now)")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    args = p.parse_args(argv)

    hunt = lune.phase_hunt(args.when)
    rows = {f.name: _fmt(getattr(hunt, f.name)) for f in dataclasses.fields(hunt)}
    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    labels = {
        "new_date": "New moon",
        "q1_date": "First quarter",
        "full_date": "Full moon",
        "q3_date": "Last quarter",
        "nextnew_date": "Next new moon",
    }
    for name, value in rows.items():
        print(f"{labels[name]:<14} {value}")
    return 0


def cmd_range(argv: list[str]) -> int:
    import lune
    from lune.core.types import Phase

    p = argparse.ArgumentParser(prog="lune range", description="All instants of one quarter phase between two instants.")
    p.add_argument("start", type=_parse_when, help="ISO-8601 instant")
    p.add_argument("end", type=_parse_when, help="ISO-8601 instant")
    p.add_argument("--phase", choices=[ph.name.lower() for ph in Phase], default="new")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    args = p.parse_args(argv)

    dates = lune.phase_range(args.start, args.end, Phase.from_name(args.phase))
    if args.json:
        print(json.dumps([_fmt(d) for d in dates], indent=2))
        return 0
    for d in dates:
        print(_fmt(d))
    return 0


def cmd_julian(argv: list[str]) -> int:
    from lune.reference import julian

    p = argparse.ArgumentParser(prog="lune julian", description="Convert between ISO-8601 instants and Julian dates (UTC).")
    p.add_argument("when", nargs="?", type=_parse_when, default=None, help="ISO-8601 instant")
    p.add_argument("--jd", type=float, default=None, help="Julian date to convert to an instant")
    args = p.parse_args(argv)
    if (args.when is None) == (args.jd is None):
        p.error("give exactly one of WHEN or --jd")

    if args.jd is not None:
        print(julian.to_datetime(args.jd).isoformat(timespec="milliseconds"))
    else:
        print(f"{julian.from_datetime(args.when):.8f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="lune", description="Lunar phase toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log search details to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("phase", help="Phase snapshot at an instant", add_help=False)
    sub.add_parser("hunt", help="Quarter phases around an instant", add_help=False)
    sub.add_parser("range", help="One quarter phase over an interval", add_help=False)
    sub.add_parser("julian", help="Julian date conversions", add_help=False)

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "phase":
        return cmd_phase(rest)

    if args.cmd == "hunt":
        return cmd_hunt(rest)

    if args.cmd == "range":
        return cmd_range(rest)

    if args.cmd == "julian":
        return cmd_julian(rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
