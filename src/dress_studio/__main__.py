"""Module entry point for python -m dress_studio."""

from __future__ import annotations

from dress_studio.app import main


if __name__ == "__main__":
    raise SystemExit(main())
