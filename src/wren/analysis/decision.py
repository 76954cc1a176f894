"""Layout decision returned by the element analyzer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LayoutDecision:
    """Which parts of an element stay on the current line."""

    open_tag_inline: bool
    content_inline: bool
    close_tag_inline: bool

    @property
    def fully_inline(self) -> bool:
        return self.open_tag_inline and self.content_inline and self.close_tag_inline

    @property
    def block_format(self) -> bool:
        return not (self.open_tag_inline or self.content_inline or self.close_tag_inline)

    @classmethod
    def inline(cls) -> LayoutDecision:
        return cls(True, True, True)

    @classmethod
    def block(cls) -> LayoutDecision:
        return cls(False, False, False)
