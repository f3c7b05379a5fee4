"""Package entry point for ``python -m segment_aligner``.

Delegates to the CLI's main(). ``python -m segment_aligner serve`` starts
the HTTP API instead.
"""

import sys

if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        from segment_aligner.server.app import run_api
        run_api()
    else:
        from segment_aligner.cli import main
        main()
