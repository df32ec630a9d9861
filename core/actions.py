from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class OutText:
    text: str


@dataclass(frozen=True)
class OutImage:
    """Send an image by URL.

    LINE fetches the picture itself, so `url` must be absolute and public.
    The same URL is used for the preview.
    """

    url: str


Action = Union[OutText, OutImage]
