"""Terminal prompts (confirm, input, password, multiline, editor, multi-select) and answer storage."""

__version__ = "0.1.0"