#!/usr/bin/env python3
"""
CLI demo for the horoscope content resolver.

Resolves one profile against a CSV export of the content table and prints
the envelope (or the NotFound diagnostics).

Usage:
    python demo/cli_demo.py --csv data/horoscope_cache.csv --sign "Cusp of Power" \
        --hemisphere SH --date 2025-04-20
"""
import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from horoscope_resolver import HoroscopeService, InvalidDateError, Profile, ResolverConfig

# Load environment variables
load_dotenv()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Resolve horoscope content for a profile.")
    parser.add_argument("--csv", required=True, help="CSV export of the content table")
    parser.add_argument("--kind", choices=["daily", "monthly"], default="daily")
    parser.add_argument("--sign", default=None, help="Preferred sign or cusp label")
    parser.add_argument("--primary", default=None, help="Primary sign")
    parser.add_argument("--secondary", default=None, help="Secondary sign")
    parser.add_argument("--cusp-name", default=None, help="Marketing cusp name, e.g. 'Cusp of Power'")
    parser.add_argument("--hemisphere", default="", help="Northern/Southern/NH/SH")
    parser.add_argument("--date", default=None, help="Explicit YYYY-MM-DD date")
    parser.add_argument("--reference-timezone", default="Australia/Sydney")
    parser.add_argument("--allow-single-sign-fallback", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = ResolverConfig(
        store_backend="csv",
        daily_csv_path=args.csv if args.kind == "daily" else None,
        monthly_csv_path=args.csv if args.kind == "monthly" else None,
        reference_timezone=args.reference_timezone,
    )
    profile = Profile(
        primary_sign=args.primary,
        secondary_sign=args.secondary,
        cusp_name=args.cusp_name,
        preferred_sign=args.sign,
        hemisphere=args.hemisphere,
    )

    service = HoroscopeService(config)
    resolve = service.daily if args.kind == "daily" else service.monthly
    try:
        outcome = resolve(
            profile,
            date=args.date,
            allow_single_sign_fallback=args.allow_single_sign_fallback or None,
        )
    except InvalidDateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    return 0 if outcome.found else 1


if __name__ == "__main__":
    sys.exit(main())
