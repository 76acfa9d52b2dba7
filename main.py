"""Root entrypoint: runs the autobak service from autobak.main.

Keeps ``python main.py --data-dir ...`` working from a source checkout
without installing the package.
"""

import sys

try:
    from autobak.main import main
except Exception as exc:
    # Provide a clear error if imports fail due to PYTHONPATH issues
    raise RuntimeError("Failed to import autobak. Ensure project root is on PYTHONPATH.") from exc


if __name__ == "__main__":
    sys.exit(main())
