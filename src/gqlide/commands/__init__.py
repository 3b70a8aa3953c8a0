"""Built-in CLI sub-commands for gqlide."""
