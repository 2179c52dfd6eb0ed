# src/tetris_engine/cli/replay.py
from __future__ import annotations

from tetris_engine.apps.replay.entrypoint import parse_args, run_replay


def main() -> int:
    return run_replay(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
