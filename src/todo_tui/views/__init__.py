"""Rich renderers for the todo application."""
