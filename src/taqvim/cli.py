from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys

from .core.errors import TaqvimError

log = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{1,4}-\d{1,2}-\d{1,2}$")
_CALENDARS = ("gregorian", "jalali", "hijri", "hijri-tabular")


def _parse_ymd(s: str):
    """'Y-M-D' (also '/' or '.') with a 1-based month -> CivilDate."""
    from .core.types import CivilDate
    from .format.locales import to_ascii_digits

    parts = re.split(r"[-/.]", to_ascii_digits(s.strip()))
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise SystemExit(f"Expected a date like 1403-01-01, got {s!r}")
    y, m, d = map(int, parts)
    return CivilDate(y, m - 1, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim day", description="Gregorian date -> Jalali and Hijri")
    p.add_argument("date", help="YYYY-MM-DD (Gregorian)")
    args = p.parse_args(argv)

    g = _parse_ymd(args.date)
    n = taqvim.gregorian_to_day_count(g)
    h = taqvim.day_count_to_hijri(n)
    print(f"gregorian  {g}")
    print(f"jalali     {taqvim.day_count_to_jalali(n)}")
    print(f"hijri      {h.date}{'' if h.official else '  (tabular)'}")
    print(f"jdn        {n}")
    return 0


def cmd_convert(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim convert", description="Convert a date between calendars")
    p.add_argument("date", help="Y-M-D with 1-based month")
    p.add_argument("--from", dest="source", choices=_CALENDARS, default="gregorian")
    p.add_argument("--to", dest="target", choices=_CALENDARS, default="jalali")
    args = p.parse_args(argv)

    out = taqvim.convert(_parse_ymd(args.date), source=args.source, target=args.target)
    print(out)
    return 0


def _add_format_args(p: argparse.ArgumentParser, default_pattern: str) -> None:
    p.add_argument("--calendar", choices=_CALENDARS, default="jalali")
    p.add_argument("--pattern", default=default_pattern)
    p.add_argument("--locale", choices=("en", "fa"), default="en")
    p.add_argument("--digits", choices=("ascii", "persian", "arabic"), default=None)
    p.add_argument("--zone", default=None, help="IANA zone id or +HH:MM (default: host local)")


def cmd_today(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim today", description="Print the current date")
    _add_format_args(p, "dddd yyyy/MM/dd")
    args = p.parse_args(argv)

    st = taqvim.CalendarState.now(args.calendar, zone=args.zone)
    print(taqvim.format_date(st, args.pattern, locale=args.locale, digits=args.digits))
    return 0


def cmd_format(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim format", description="Format a date with a pattern")
    p.add_argument("date", help="Y-M-D in --calendar, 1-based month")
    _add_format_args(p, "dddd d MMMM yyyy")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    st = taqvim.CalendarState.of(args.calendar, d.year, d.month, d.day, zone=args.zone)
    print(taqvim.format_date(st, args.pattern, locale=args.locale, digits=args.digits))
    return 0


def cmd_parse(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim parse", description="Parse text with a pattern and print the fields")
    p.add_argument("text")
    p.add_argument("--pattern", default="yyyy/MM/dd")
    p.add_argument("--calendar", choices=_CALENDARS, default="jalali")
    p.add_argument("--zone", default=None)
    p.add_argument("--json", action="store_true", help="print the field snapshot as JSON")
    args = p.parse_args(argv)

    st = taqvim.parse_date(args.text, args.pattern, calendar=args.calendar, zone=args.zone)
    if args.json:
        print(json.dumps(st.snapshot().to_dict(), ensure_ascii=False))
    else:
        print(st.isoformat())
        print(f"gregorian  {st.to_gregorian()}")
    return 0


def cmd_engines(argv: list[str]) -> int:
    import taqvim

    p = argparse.ArgumentParser(prog="taqvim engines", description="List engines or show one engine's info")
    p.add_argument("name", nargs="?")
    args = p.parse_args(argv)

    if args.name is None:
        for name in taqvim.list_engines():
            print(name)
        return 0
    for k, v in taqvim.engine_info(args.name).items():
        print(f"{k:16s} {v}")
    return 0


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING if verbosity <= 0 else (logging.INFO if verbosity == 1 else logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="taqvim", description="Gregorian / Jalali / Hijri calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="more logging (repeatable)")
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("day", help="Gregorian date -> Jalali and Hijri")
    sub.add_parser("convert", help="Convert a date between calendars")
    sub.add_parser("today", help="Print the current date")
    sub.add_parser("format", help="Format a date with a pattern")
    sub.add_parser("parse", help="Parse text with a pattern")
    sub.add_parser("engines", help="List engines / show engine info")
    sub.add_parser("month", help="Print a month grid (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "hijri-drift"],
        help="Which diagnostic to run",
    )

    # Backward compatibility: `taqvim YYYY-MM-DD`
    rest_argv = [a for a in argv if a not in ("-v", "-vv", "--verbose")]
    if rest_argv and _DATE_RE.match(rest_argv[0]):
        _configure_logging(len(argv) - len(rest_argv))
        return cmd_day(rest_argv)

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.verbose)
    if args.cmd is None:
        p.print_help()
        return 0

    try:
        if args.cmd == "day":
            return cmd_day(rest)
        if args.cmd == "convert":
            return cmd_convert(rest)
        if args.cmd == "today":
            return cmd_today(rest)
        if args.cmd == "format":
            return cmd_format(rest)
        if args.cmd == "parse":
            return cmd_parse(rest)
        if args.cmd == "engines":
            return cmd_engines(rest)
        if args.cmd == "month":
            return _run_module_main("taqvim.diagnostics.pretty_month", rest)
        if args.cmd == "diag":
            tool_map = {
                "round-trip": "taqvim.diagnostics.round_trip",
                "hijri-drift": "taqvim.diagnostics.hijri_drift",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (TaqvimError, KeyError) as e:
        log.debug("command failed", exc_info=True)
        print(f"taqvim: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
