#!/usr/bin/env python3
"""Runner for the lucky draw and grouping from a names file.

Example:
  python run_draw.py --file names.txt --draws 3 --group-size 4 --seed 42 --export groups.csv

"""
import argparse
import asyncio
import random
from pathlib import Path

from luckydraw.core.errors import InvalidConfigurationError
from luckydraw.core.logger import setup_logging
from luckydraw.core.settings import make_session, settings
from luckydraw.services.scheduler import LoopScheduler


def _load(session, path: Path, dedupe: bool) -> int:
    data = path.read_bytes()
    if path.suffix.lower() == ".csv":
        return session.add_csv(data, dedupe=dedupe, encoding=settings.csv_encoding, sep=settings.csv_sep)
    return session.add_text(data.decode(settings.csv_encoding, errors="replace"), dedupe=dedupe)


def _show(participant, final):
    if final:
        print(f"\r  Winner! {participant.name}" + " " * 20)
    else:
        print(f"\r  Choosing... {participant.name}" + " " * 20, end="", flush=True)


async def run(args) -> int:
    session = make_session(scheduler=LoopScheduler(), rng=random.Random(args.seed))
    session.set_allow_repeat(args.allow_repeat)
    session.draw.on_display = _show

    added = _load(session, Path(args.file), args.dedupe)
    if not added:
        print("No participants found in the file.")
        return 1
    print(f"{added} participant(s) loaded.")

    tick = session.draw.interval_ms / 1000.0
    try:
        for n in range(1, args.draws + 1):
            if not session.start_draw():
                print("Nobody left to draw.")
                break
            print(f"Draw #{n}:")
            while session.draw.in_progress:
                await asyncio.sleep(tick)
    finally:
        session.close()

    if args.group_size:
        try:
            groups = session.generate_groups(args.group_size) or []
        except InvalidConfigurationError as e:
            print(f"Cannot build groups: {e}")
            return 2
        for idx, group in enumerate(groups, start=1):
            print(f"Group {idx}: {', '.join(p.name for p in group)}")
        if args.export:
            Path(args.export).write_text(session.export_csv(sep=settings.csv_sep), encoding=settings.csv_encoding)
            print(f"Groups written to {args.export}")
    return 0


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", required=True, help="Names file: .csv or one name per line")
    parser.add_argument("--draws", type=int, default=1, help="Number of draws to run")
    parser.add_argument("--allow-repeat", action="store_true", help="Let past winners win again")
    parser.add_argument("--dedupe", action="store_true", help="Skip names already loaded")
    parser.add_argument("--group-size", type=int, default=0, help="Also split everybody into groups of this size")
    parser.add_argument("--seed", type=int, default=None, help="Optional seed")
    parser.add_argument("--export", default=None, help="CSV path for the groups")
    args = parser.parse_args()

    setup_logging("WARNING")
    raise SystemExit(asyncio.run(run(args)))

if __name__ == '__main__':
    main()
