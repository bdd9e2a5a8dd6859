"""
run_all.py
----------
Runs the full processing pipeline in order.
Execute from the project root:

    python run_all.py

Optional flags:
    python run_all.py --from 02 # start from script 02 onwards
    python run_all.py --only 01 03 # run only scripts 01 and 03
    python run_all.py --year 2021 --month-from 1 --month-to 6
                                   # filter window passed to script 02
"""

import os
import subprocess
import sys
import time
import argparse

SCRIPTS = [
    ("01", "processing/01_clean_street_data.py"),
    ("02", "processing/02_bicycle_theft_map.py"),
    ("03", "processing/03_precompute_summary.py"),
]

# Scripts that accept the filter window flags
_WINDOW_SCRIPTS = {"02"}


def _script_env() -> dict:
    """Environment with the project root on PYTHONPATH so scripts can import utils."""
    root  = os.path.dirname(os.path.abspath(__file__))
    paths = [root, os.environ.get("PYTHONPATH", "")]
    return {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in paths if p)}


def run_script(number: str, path: str, extra_args: list | None = None) -> bool:
    """Run a single script. Returns True on success, False on failure."""
    print(f"\n{'='*60}")
    print(f"  [{number}] {path}")
    print(f"{'='*60}")
    start = time.time()

    result = subprocess.run(
        [sys.executable, path, *(extra_args or [])],
        env=_script_env(),
        # Don't capture output — let it stream to the terminal in real time
    )

    elapsed = round(time.time() - start, 1)

    if result.returncode == 0:
        print(f"\n  ✓ Completed in {elapsed}s")
        return True
    else:
        print(f"\n  ✗ FAILED (exit code {result.returncode}) after {elapsed}s")
        return False


def window_args(args) -> list:
    """Translate run_all flags into script 02 flags, skipping unset ones."""
    out = []
    if args.crime_type:
        out += ["--crime-type", args.crime_type]
    for flag, value in (("--year", args.year),
                        ("--month-from", args.month_from),
                        ("--month-to", args.month_to)):
        if value is not None:
            out += [flag, str(value)]
    return out


def select_scripts(args) -> list:
    scripts_to_run = SCRIPTS

    if args.only_scripts:
        scripts_to_run = [
            (n, p) for n, p in SCRIPTS if n in args.only_scripts
        ]
        not_found = set(args.only_scripts) - {n for n, _ in scripts_to_run}
        if not_found:
            print(f"Warning: script numbers not found: {', '.join(sorted(not_found))}")

    elif args.from_script:
        numbers = [n for n, _ in SCRIPTS]
        if args.from_script not in numbers:
            print(f"Error: script '{args.from_script}' not found. "
                  f"Valid numbers: {', '.join(numbers)}")
            sys.exit(1)
        idx = numbers.index(args.from_script)
        scripts_to_run = SCRIPTS[idx:]

    return scripts_to_run


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the bicycle theft map pipeline")
    parser.add_argument(
        "--from", dest="from_script", metavar="N",
        help="Start from script N (e.g. --from 02 skips 01)"
    )
    parser.add_argument(
        "--only", dest="only_scripts", metavar="N", nargs="+",
        help="Run only the specified script numbers (e.g. --only 01 03)"
    )
    parser.add_argument("--crime-type", help="Crime type for script 02")
    parser.add_argument("--year", type=int, help="Year for script 02")
    parser.add_argument("--month-from", type=int, help="First month (1-12) for script 02")
    parser.add_argument("--month-to", type=int, help="Last month (1-12) for script 02")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    scripts_to_run = select_scripts(args)

    if not scripts_to_run:
        print("No scripts to run.")
        sys.exit(0)

    # Run
    overall_start = time.time()
    results = {}

    for number, path in scripts_to_run:
        extra = window_args(args) if number in _WINDOW_SCRIPTS else []
        success = run_script(number, path, extra)
        results[number] = success
        if not success:
            print(f"\nPipeline stopped at script {number}.")
            print(f"Fix the error above and rerun with:  python run_all.py --from {number}")
            break

    # Summary
    total = round(time.time() - overall_start, 1)
    passed = sum(results.values())
    failed = len(results) - passed

    print(f"\n{'='*60}")
    print(f"  Pipeline summary  ({total}s total)")
    print(f"{'='*60}")
    for number, path in scripts_to_run:
        if number in results:
            icon = "✓" if results[number] else "✗"
            print(f"  {icon} [{number}] {path}")
        else:
            print(f"  - [{number}] {path}  (skipped)")

    print()
    if failed == 0:
        print(f"  All {passed} scripts passed.")
        print("\n  Start the dashboard with:  streamlit run app.py")
    else:
        print(f"  {passed} passed, {failed} failed.")
        sys.exit(1)


if __name__ == "__main__":
    main()
