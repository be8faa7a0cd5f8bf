"""Interactive function plotter, expression evaluator and evaluation benchmark."""

__version__ = "0.1.0"
__all__ = ["app", "benchmark", "expression", "plot", "textinput"]