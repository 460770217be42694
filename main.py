from __future__ import annotations

import sys
from pathlib import Path


def _ensure_root_on_path() -> None:
    root = Path(__file__).resolve().parent
    if str(root) not in sys.path:
        # Append (not prepend) to avoid shadowing installed packages.
        sys.path.append(str(root))


def main() -> int:
    _ensure_root_on_path()
    from election_predicter.runtime.lifecycle import main as runtime_main

    return runtime_main()


if __name__ == "__main__":
    raise SystemExit(main())
