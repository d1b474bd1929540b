from .cli import execute_cli

execute_cli()
