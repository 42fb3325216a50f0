"""
CircuitMind — entry point.

Usage:
    python -m circuitmind serve                   # start web server on :8000
    python -m circuitmind serve --port 3000
    python -m circuitmind validate topology.json  # check a saved topology
    python -m circuitmind interpret response.txt  # normalize a saved AI answer
"""

import json
import logging
import sys
from pathlib import Path


def _validate(path: str) -> int:
    from circuitmind.catalog import load_catalog
    from circuitmind.pipeline.topology import (
        has_blocking_issues, issues_to_dict, parse_topology, validate_topology,
    )

    try:
        topology = parse_topology(json.loads(Path(path).read_text(encoding="utf-8")))
    except (OSError, KeyError, TypeError, ValueError) as e:
        print(f"Invalid topology: {e}")
        return 1
    issues = validate_topology(topology, load_catalog())
    print(json.dumps(issues_to_dict(issues), indent=2, ensure_ascii=False))
    return 1 if has_blocking_issues(issues) else 0


def _interpret(path: str) -> int:
    from circuitmind.pipeline.solution import (
        SolutionResponseError, interpret_response_text, solution_to_dict,
    )

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Could not read {path}: {e}")
        return 1
    try:
        solutions = interpret_response_text(text)
    except SolutionResponseError as e:
        print(f"Could not interpret AI response: {e}")
        return 1
    print(json.dumps([solution_to_dict(s) for s in solutions], indent=2, ensure_ascii=False))
    return 0


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from circuitmind.web.server import main as serve
        serve(host=host, port=port)
    elif cmd in ("validate", "interpret") and len(args) == 2:
        run = _validate if cmd == "validate" else _interpret
        sys.exit(run(args[1]))
    else:
        print(f"Unknown command: {' '.join(args)}")
        print("Usage: python -m circuitmind serve [--port PORT] [--host HOST]")
        print("       python -m circuitmind validate TOPOLOGY.json")
        print("       python -m circuitmind interpret RESPONSE.txt")
        sys.exit(1)


if __name__ == "__main__":
    main()
