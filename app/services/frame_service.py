"""Social frame screens and button navigation.

Each screen advertises an image URL, four buttons and the URL the host
posts button presses back to. Image rendering lives elsewhere.
"""

from __future__ import annotations

from typing import Any

from app.core.errors import ValidationAppError
from app.schemas.frame import FrameButton, FrameData, FrameInteraction

DEFAULT_ACTION = "home"

# buttonIndex (1-based) pressed on any screen -> next screen
BUTTON_TARGETS: dict[int, str] = {
    1: "dashboard",
    2: "portfolio",
    3: "alerts",
    4: "settings",
}

_SCREENS: dict[str, dict[str, Any]] = {
    "home": {
        "buttons": ["📊 Dashboard", "💼 Portfolio", "🔔 Alerts", "⚙️ Settings"],
        "input_text": None,
    },
    "dashboard": {
        "buttons": ["🔄 Refresh", "📈 Trends", "🏠 Home", "💼 Portfolio"],
        "input_text": None,
    },
    "portfolio": {
        "buttons": ["➕ Add Asset", "🔄 Refresh", "🏠 Home", "🔔 Alerts"],
        "input_text": "Enter asset symbol (e.g., BTC, ETH)",
    },
    "alerts": {
        "buttons": ["➕ New Alert", "🔄 Refresh", "🏠 Home", "💼 Portfolio"],
        "input_text": "Enter price target (e.g., BTC:50000)",
    },
    "settings": {
        "buttons": ["🔗 Connect Wallet", "📱 Notifications", "🏠 Home", "💎 Upgrade"],
        "links": {"🔗 Connect Wallet": "/connect", "💎 Upgrade": "/upgrade"},
        "input_text": None,
    },
}


class FrameService:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def build_frame(self, action: str | None) -> FrameData:
        """Return the screen for ``action``; unknown actions fall back to home."""
        name = action if action in _SCREENS else DEFAULT_ACTION
        screen = _SCREENS[name]
        links: dict[str, str] = screen.get("links", {})

        buttons = [
            FrameButton(label=label, action="link", target=f"{self.base_url}{links[label]}")
            if label in links
            else FrameButton(label=label, action="post")
            for label in screen["buttons"]
        ]
        return FrameData(
            image=f"{self.base_url}/api/frame/image?type={name}",
            buttons=buttons,
            post_url=f"{self.base_url}/api/frame",
            input_text=screen["input_text"],
        )

    def handle_interaction(self, payload: FrameInteraction) -> FrameData:
        if payload.untrusted_data is None or payload.trusted_data is None:
            raise ValidationAppError(
                code="invalid_frame_data",
                message="Invalid frame data",
                error="Missing untrustedData or trustedData",
            )

        button_index = _button_number(payload.untrusted_data.get("buttonIndex"))
        return self.build_frame(BUTTON_TARGETS.get(button_index, DEFAULT_ACTION))


def _button_number(value: Any) -> int | None:
    # JSON true is not a button; 2.0 is button 2
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
