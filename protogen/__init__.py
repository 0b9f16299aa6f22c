"""protogen — protocol-buffer code generation for project trees."""

__version__ = "0.1.0"
