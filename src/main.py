"""Run script.

Why it exists:
- Lets the CLI run with `python src/main.py` during development.
- Keeps a simple entrypoint alongside the installed `snippets` script.
"""

from __future__ import annotations

import sys

# Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
# Snippet content is printed verbatim, so the stream must accept any text.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
