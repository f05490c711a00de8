#!/usr/bin/env python
"""
Start the order totals Streamlit screen.

Usage:
    python scripts/run_app.py [extra streamlit args...]
"""
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
UI_MODULE = PROJECT_ROOT / 'src' / 'order_totals' / 'ui' / 'app_streamlit.py'


def build_command(extra_args=None) -> list[str]:
    return [sys.executable, '-m', 'streamlit', 'run', str(UI_MODULE), *(extra_args or [])]


def main(argv=None) -> int:
    if not UI_MODULE.exists():
        print(f"ERROR: Streamlit screen missing: {UI_MODULE}")
        return 1

    env = dict(os.environ)
    src = str(PROJECT_ROOT / 'src')
    env['PYTHONPATH'] = os.pathsep.join(p for p in (src, env.get('PYTHONPATH')) if p)

    cmd = build_command(sys.argv[1:] if argv is None else argv)
    print(f"Launching order totals UI: {' '.join(cmd)}")
    try:
        return subprocess.run(cmd, cwd=str(PROJECT_ROOT), env=env).returncode
    except KeyboardInterrupt:
        print("\nOrder totals UI stopped.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
