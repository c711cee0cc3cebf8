"""Display adapter: form state in, per-field view objects out.

The validator never touches markup. Templates receive one ``FieldView``
per field and decide how to show it; the view already knows whether the
control is invalid, which message goes with it, and whether it is the
one control that gets focus.

Usage::

    state = FormState.from_form(form, REGISTRATION_FIELDS).with_report(report)
    return Template("register.html", form=field_views(state))

    {# register.html #}
    <input id="email" name="email" value="{{ form.email.value }}"{{ form.email.attrs | html_attrs }}>
    <p class="error" id="email-error">{{ form.email.message }}</p>
"""

from collections.abc import Iterable
from dataclasses import dataclass
from types import SimpleNamespace

from regdesk.validation.fields import FieldSpec, FileDescriptor
from regdesk.validation.registration import REGISTRATION_FIELDS
from regdesk.validation.result import Invalid
from regdesk.validation.state import FormState

# Never echoed back into the page on a re-render
SECRET_FIELDS = frozenset({"password", "confirm"})


@dataclass(frozen=True, slots=True)
class OptionView:
    """One radio, checkbox, ``<option>`` or datalist entry."""

    value: str
    label: str
    selected: bool = False
    attrs: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class FieldView:
    name: str
    label: str
    tag: str
    value: str = ""
    checked: bool = False
    message: str = ""
    invalid: bool = False
    autofocus: bool = False
    attrs: tuple[tuple[str, str], ...] = ()
    options: tuple[OptionView, ...] = ()

    @property
    def error_id(self) -> str:
        return f"{self.name}-error"

    @property
    def css_class(self) -> str:
        return "invalid" if self.invalid else ""


def _display_value(spec: FieldSpec, raw: object) -> str:
    if spec.name in SECRET_FIELDS:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, FileDescriptor):
        return raw.original_name
    return ""


def _options(
    spec: FieldSpec,
    raw: object,
    *,
    autofocus: bool,
) -> tuple[OptionView, ...]:
    chosen = set(raw) if isinstance(raw, list) else {raw}
    options = []
    for index, (value, label) in enumerate(spec.choices):
        attrs: tuple[tuple[str, str], ...] = ()
        # Groups focus their first box; a group has no focusable container
        if spec.group and index == 0 and autofocus:
            attrs = (("autofocus", ""),)
        options.append(OptionView(value, label, value in chosen, attrs))
    return tuple(options)


def field_view(spec: FieldSpec, state: FormState, *, autofocus: bool = False) -> FieldView:
    """Build the view of a single field."""
    raw = state.value(spec.name)
    result = state.result(spec.name)
    invalid = isinstance(result, Invalid)

    attrs = list(spec.attrs)
    if invalid:
        attrs.append(("aria-invalid", "true"))
        attrs.append(("aria-describedby", f"{spec.name}-error"))
    if autofocus and not spec.group:
        attrs.append(("autofocus", ""))

    return FieldView(
        name=spec.name,
        label=spec.label,
        tag=spec.tag,
        value=_display_value(spec, raw),
        checked=raw is True,
        message=result.message,
        invalid=invalid,
        autofocus=autofocus,
        attrs=tuple(attrs),
        options=_options(spec, raw, autofocus=autofocus),
    )


def field_views(
    state: FormState,
    fields: Iterable[FieldSpec] = REGISTRATION_FIELDS,
) -> SimpleNamespace:
    """Views for every field, reachable by name (``form.email``).

    Only the first invalid field, in field order, gets ``autofocus``.
    """
    views: dict[str, FieldView] = {}
    focused = False
    for spec in fields:
        focus = not focused and isinstance(state.result(spec.name), Invalid)
        focused = focused or focus
        views[spec.name] = field_view(spec, state, autofocus=focus)
    return SimpleNamespace(**views)
