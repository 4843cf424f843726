"""Exceptions raised by the theme registry and the export serializer.

Parsing never raises: every line has a fallback block kind.
"""


class UnknownThemeError(ValueError):
    """The requested theme id is not registered. No fallback theme is substituted."""

    def __init__(self, theme_id: object, valid_ids: list[str]) -> None:
        self.theme_id = theme_id
        self.valid_ids = valid_ids
        super().__init__(
            f"'{theme_id}' is not a registered theme. Valid options: {', '.join(valid_ids)}"
        )


class ExportFailedError(RuntimeError):
    """Packing the .docx byte stream could not complete. No partial output is produced."""
