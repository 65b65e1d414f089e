"""
Exception hierarchy shared by the resolver, renderer and site writer.
"""


class VanityError(RuntimeError):
    """Base class for every error raised while generating a vanity site."""


class ConfigError(VanityError):
    """Raised when the vanity configuration cannot be loaded or validated."""


class VCSError(ConfigError):
    """Raised when a path names an unknown VCS or its VCS cannot be inferred."""


class TemplateError(VanityError):
    """Base class for template failures."""


class TemplateParseError(TemplateError):
    """Raised when a template has invalid syntax."""


class TemplateRenderError(TemplateError):
    """Raised when a template references data that does not exist."""


class InputError(VanityError):
    """Raised when an input file is missing or unreadable."""


class OutputError(VanityError):
    """Raised when generated files cannot be written."""
