"""gqlxp: explore GraphQL schemas from the terminal."""

__version__ = "0.1.0"
