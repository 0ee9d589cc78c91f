"""Mirror organizations and repositories from one Gitea server to another."""

__version__ = "0.1.0"
