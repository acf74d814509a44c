"""fitplan: rule-based workout plan generation and progress tracking."""

__version__ = "0.1.0"
