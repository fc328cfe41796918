import sys
from pathlib import Path

import fncli

from .core.errors import PlannerError
from .lib import ansi


def main():
    fncli.autodiscover(Path(__file__).parent, "planner")
    if not sys.stdout.isatty():
        ansi.use(ansi.PLAIN)

    user_args = sys.argv[1:]
    argv = ["planner", *(user_args or ["dashboard"])]
    try:
        code = fncli.dispatch(argv)
    except PlannerError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
