"""Excel rendering for payout statements."""

from .statement_renderer import StatementRenderer

__all__ = ["StatementRenderer"]
