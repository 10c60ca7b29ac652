# DirAnalyzer Lifecycle - Module Entry Point
# python -m installer.lifecycle {install,uninstall} [OPTIONS]
# Created: 2026-10-18

from __future__ import annotations

import sys

from installer.lifecycle.cli import install_main, uninstall_main

COMMANDS = {"install": install_main, "uninstall": uninstall_main}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS:
        print("usage: python -m installer.lifecycle {install,uninstall} [OPTIONS]", file=sys.stderr)
        return 1
    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    sys.exit(main())
