"""Interactive console: slash command core and the REPL that hosts it."""
