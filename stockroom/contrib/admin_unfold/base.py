"""
Base classes for Unfold admin in Stockroom.

Provides BaseModelAdmin with sensible defaults for textarea fields and
quantity formatting.
"""

from django import forms
from django.contrib.admin.widgets import AdminTextareaWidget
from unfold.admin import ModelAdmin
from unfold.widgets import UnfoldAdminTextareaWidget


def format_quantity(value) -> str:
    """
    Format an on-hand quantity.

    Returns:
        "-" for None, "12" for 12, "-3" for -3
    """
    if value is None:
        return "-"
    return f"{int(value):d}"


class BaseModelAdmin(ModelAdmin):
    """
    ModelAdmin base with sensible defaults.

    Notes and JSON metadata are rarely long, so textareas are shortened to
    two rows and capped at 42rem wide (aligned with other form fields).
    """

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)

        for field in form.base_fields.values():
            widget = field.widget
            if not isinstance(
                widget, (forms.Textarea, AdminTextareaWidget, UnfoldAdminTextareaWidget)
            ):
                continue

            style_parts = [
                s for s in widget.attrs.get("style", "").split(";")
                if s.strip() and "height" not in s.lower() and "width" not in s.lower()
            ]
            style_parts.append("width: 100%; max-width: 42rem;")
            widget.attrs["style"] = "; ".join(s.strip() for s in style_parts)
            widget.attrs["rows"] = 2

        return form
