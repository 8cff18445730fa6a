"""
aigit dashboard entrypoint.

Launches the Streamlit UI. All composition lives in app.ui; this module only
starts Streamlit programmatically, or renders directly when already running
under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --data dashboard/public/data.json

    - Streamlit direct:
        streamlit run src/app/main.py -- --data https://ci.example/data.json
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the dashboard UI.

    If already executing within a Streamlit server (STREAMLIT_SERVER_PORT is set)
    the app renders directly. Otherwise this execs ``python -m streamlit run
    <this_module>`` and passes supported options through after ``--``.

    Args:
        argv (list[str] | None): CLI arguments; sys.argv[1:] when None.

    Examples:
        python -m app.main --data ./data.json
    """
    args = list(sys.argv[1:] if argv is None else argv)

    parser = argparse.ArgumentParser(description="aigit transcript dashboard")
    parser.add_argument(
        "--data",
        default=None,
        help="Export to load at startup: http(s) URL or local path (default: ./data.json).",
    )
    ns = parser.parse_args(args)

    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(default_data=ns.data)
        return

    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]
    if ns.data:
        cmd += ["--", "--data", ns.data]

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Options after '--' when started with `streamlit run`
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--data", default=None)
    ns, _ = parser.parse_known_args(sys.argv[1:])
    streamlit_app(default_data=ns.data)
