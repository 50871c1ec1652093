"""
Entry point for the `shipit` command-line interface.

shipit stages, commits and pushes a project to its git remote and deploys
it to Vercel, streaming the output of every tool it runs.

This module provides the main() entry point that delegates to the Click CLI.
"""


def main():
    """Main entry point for the shipit CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
