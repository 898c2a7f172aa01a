"""a11y-ci CLI module."""


def main() -> None:
    """CLI entry point."""
    from a11y_ci.cli.app import main as app_main

    app_main()


__all__ = ["main"]
