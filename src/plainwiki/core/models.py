"""Data models for PlainWiki."""

from pydantic import BaseModel, field_validator

from plainwiki.core.validation import is_valid_title


class Page(BaseModel):
    """Represents a wiki page."""

    title: str
    body: bytes = b""

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        if not is_valid_title(value):
            raise ValueError(f"invalid page title: {value!r}")
        return value

    @property
    def text(self) -> str:
        """Body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
