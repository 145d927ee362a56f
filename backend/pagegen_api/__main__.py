"""
PageGen API entrypoint.

Usage:
    python -m pagegen_api
"""

import uvicorn

from pagegen.config import API_HOST, API_PORT


def main() -> int:
    uvicorn.run("pagegen_api.main:app", host=API_HOST, port=API_PORT)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
