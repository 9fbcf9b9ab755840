"""Pydantic schemas for the social frame surface."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class FrameButton(BaseModel):
    label: str
    action: Literal["post", "link"] = "post"
    target: str | None = None


class FrameData(BaseModel):
    """Metadata for one frame screen: image, up to four buttons, post target."""

    model_config = ConfigDict(populate_by_name=True)

    image: str
    buttons: list[FrameButton]
    post_url: str = Field(..., alias="postUrl")
    input_text: str | None = Field(None, alias="inputText")


class FrameInteraction(BaseModel):
    """Body posted by the frame host when a button is pressed.

    ``trustedData`` carries the host's signed message; it is required but not
    verified here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    untrusted_data: dict[str, Any] | None = Field(None, alias="untrustedData")
    trusted_data: dict[str, Any] | None = Field(None, alias="trustedData")
