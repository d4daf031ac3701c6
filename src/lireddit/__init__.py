"""lireddit: GraphQL backend for a link-voting site."""

__version__ = "0.1.0"
