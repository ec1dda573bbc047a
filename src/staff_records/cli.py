# -*- coding: utf-8 -*-
"""Command line interface for identity numbers and birth-date derived fields."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Optional, Sequence

from staff_records.config import AppSettings, SettingsError, get_settings
from staff_records.core.clock import Clock
from staff_records.core.dates import age_from_birth_date, parse_date, retirement_date_iso
from staff_records.core.logging_config import setup_logging
from staff_records.nic.codec import convert_legacy_to_modern, extract_info, normalize, validate
from staff_records.nic.errors import InvalidIdentityNumberError


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, default=str))


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _run_validate(args: argparse.Namespace) -> int:
    result = validate(args.value)
    _emit({"is_valid": result.is_valid, "is_legacy_format": result.is_legacy_format, "format": result.format.value})
    return 0 if result.is_valid else 1


def _run_convert(args: argparse.Namespace) -> int:
    converted = convert_legacy_to_modern(args.value)
    if converted is None:
        return _fail("Not a legacy identity number")
    _emit({"modern_form": converted})
    return 0


def _run_info(args: argparse.Namespace) -> int:
    info = extract_info(args.value)
    payload = asdict(info)
    payload["format"] = info.format.value
    payload["sex"] = info.sex.value if info.sex is not None else None
    _emit(payload)
    return 0 if info.is_valid else 1


def _run_normalize(args: argparse.Namespace) -> int:
    try:
        identity = normalize(args.value)
    except InvalidIdentityNumberError as exc:
        return _fail(str(exc))
    _emit(asdict(identity))
    return 0


def _run_dates(args: argparse.Namespace, clock: Clock) -> int:
    try:
        birth = parse_date(args.date_of_birth)
    except ValueError as exc:
        return _fail(str(exc))
    _emit(
        {
            "date_of_birth": birth.isoformat(),
            "age": age_from_birth_date(birth, clock=clock),
            "date_of_retirement": retirement_date_iso(birth),
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="staff-records", description="Staff records identity tools")
    sub = parser.add_subparsers(dest="command", required=True)

    nic = sub.add_parser("nic", help="Identity number operations")
    nic_sub = nic.add_subparsers(dest="nic_command", required=True)
    for name, handler, help_text in (
        ("validate", _run_validate, "Classify as legacy, modern or invalid"),
        ("convert", _run_convert, "Convert a legacy number to the modern form"),
        ("info", _run_info, "Decode birth year, day-of-year and sex"),
        ("normalize", _run_normalize, "Produce the stored modern/legacy pair"),
    ):
        command = nic_sub.add_parser(name, help=help_text)
        command.add_argument("value")
        command.set_defaults(handler=handler)

    dates = sub.add_parser("dates", help="Age and retirement date for a birth date")
    dates.add_argument("date_of_birth", help="ISO date, YYYY-MM-DD")
    return parser


def main(argv: Optional[Sequence[str]] = None, *, clock: Clock | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings: AppSettings = get_settings()
    except SettingsError as exc:
        return _fail(str(exc))
    setup_logging(settings.log_level_value, settings.log_file)

    if args.command == "dates":
        return _run_dates(args, clock or Clock.for_timezone(settings.timezone))
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
