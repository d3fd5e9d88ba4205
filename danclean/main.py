"""Entry point for the Dan Clean terminal."""

from __future__ import annotations

from danclean.pos_app import DanCleanApp


def main() -> None:
    """Run the Textual application."""
    DanCleanApp().run()


if __name__ == "__main__":
    main()
