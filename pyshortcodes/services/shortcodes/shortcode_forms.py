"""
Salon form shortcodes
---------------------
[salon_service_create]
[salon_service_create name-field="Haircut" price-field="25"]
[salon_assistant_create submit-btn-label="Add"]Introduce a new assistant[/salon_assistant_create]

Render the booking back office forms.  Every ``*-field`` attribute sets
the placeholder (and, for numeric inputs, the initial value) of the input
of the same name.  Enclosed content becomes an introductory paragraph.

Submitting the forms is left to the page: the markup only carries the
API base URL in ``data-api-base``.
"""

from __future__ import annotations

import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

from pyshortcodes.core.config import get_settings

from .attributes import shortcode_atts
from .hooks import ShortcodeHooks
from .registry import ShortcodeRegistry

_here = os.path.dirname(__file__)
_env = Environment(
    loader=FileSystemLoader(os.path.join(_here, "templates")),
    autoescape=select_autoescape(["html"]),
)

_DEFAULT_IMAGE = "https://img.freepik.com/free-photo/single-whole-red-apple-white_114579-10489.jpg"

SERVICE_DEFAULTS = {
    "user-field": "Username",
    "password-field": "Password",
    "name-field": "Service Name",
    "price-field": "10",
    "unit-field": "10",
    "exclusive-field": "1",
    "secondary-field": "1",
    "secondary_display_mode-field": "always",
    "execution_order-field": "1",
    "empty_assistants-field": "1",
    "description-field": "description",
    "categories-field": "1, 2, 6",
    "image_url-field": _DEFAULT_IMAGE,
    "submit-btn-label": "Submit",
}

ASSISTANT_DEFAULTS = {
    "user-field": "Username",
    "password-field": "Password",
    "name-field": "Assistant Name",
    "email-field": "admin@gmail.com",
    "phone_country_code-field": "+44",
    "phone-field": "987-45-26",
    "description-field": "Very professional master",
    "image_url-field": _DEFAULT_IMAGE,
    "submit-btn-label": "Submit",
}

DISPLAY_MODES = [
    ("always", "always"),
    ("category", "belong to the same category"),
    ("service", "is child of selected service"),
]


def _durations() -> list[tuple[str, str]]:
    """Half-hour steps from 00:00 to 23:30."""
    steps = [f"{minutes // 60:02d}:{minutes % 60:02d}" for minutes in range(0, 24 * 60, 30)]
    return [(s, s) for s in steps]


def register(registry: ShortcodeRegistry, hooks: ShortcodeHooks | None = None) -> None:
    """Register both forms; their attribute filters come from *hooks* (default: shared)."""

    @registry.register("salon_service_create")
    def service_form(attrs, content, tag) -> str:
        atts = shortcode_atts(SERVICE_DEFAULTS, attrs, tag, hooks=hooks)
        return _env.get_template("service_form.html").render(
            atts=atts,
            content=content,
            durations=_durations(),
            display_modes=DISPLAY_MODES,
            api_base=get_settings().service_api_base_url,
        )

    @registry.register("salon_assistant_create")
    def assistant_form(attrs, content, tag) -> str:
        atts = shortcode_atts(ASSISTANT_DEFAULTS, attrs, tag, hooks=hooks)
        return _env.get_template("assistant_form.html").render(
            atts=atts,
            content=content,
            api_base=get_settings().service_api_base_url,
        )
