"""
Native Click implementation of the init command.

Usage: shipit init
"""

import click

from ..context import ShipitContext

# Default config template with comments
DEFAULT_CONFIG_TEMPLATE = """\
# shipit configuration file
# Values can also be set with environment variables, e.g. SHIPIT_GIT__REMOTE

[runner]
# Maximum bytes captured per output stream before a command is stopped
max_buffer = 10485760
# Seconds before a command is stopped (0 = no limit)
timeout = 900

[git]
# Remote that 'shipit deploy' pushes to
remote = "origin"
# Branch used when the current branch cannot be determined
default_branch = "main"
# Message of the deploy commit
commit_message = "deploy: automatic"

[build]
# Command that builds the project before a Vercel deploy
command = "npm run build"

[vercel]
# Vercel CLI invocation
command = "npx vercel"
# Secret store key of the Vercel token
secret_key = "vercelToken"
# Project name used when package.json and the folder name give none
default_name = "deploy-project"

[secrets]
# Secret store file (default ~/.shipit/secrets.json)
# path = ""

[logging]
# Log level (debug, info, warning, error)
level = "warning"
# Output debug logs to stderr
console = false
# Output debug logs to ~/.shipit/shipit.log
file = true
"""


@click.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.pass_obj
def init(ctx: ShipitContext, force: bool) -> None:
    """Create .shipit/config.toml with the default settings.

    \b
    Examples:

        shipit init           # Create the config file

        shipit init --force   # Reset the config file to defaults
    """
    shipit_dir = ctx.project_root / ".shipit"
    config_path = shipit_dir / "config.toml"

    if config_path.exists() and not force:
        click.echo(f"Config already exists at {config_path}")
        return

    shipit_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG_TEMPLATE)
    click.echo(f"Created {config_path}")
    click.echo("")
    click.echo("Save your Vercel token with 'shipit token set'.")
