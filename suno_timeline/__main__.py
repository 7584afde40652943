"""Package entry point for ``python -m suno_timeline``.

HOW: Delegates to the CLI's main(). ``--serve`` starts the HTTP API
instead.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from suno_timeline.server.app import run_api
        run_api()
    else:
        from suno_timeline.cli import main
        main()
