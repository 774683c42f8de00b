from spamctl.cli import cli

cli()
