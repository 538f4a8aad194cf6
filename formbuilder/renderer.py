from typing import Optional

from jinja2 import Environment, select_autoescape

from .fields import pretty
from .form import FormModel
from .types import WidgetKind

FORM_HTML = """
{%- macro flags(f) -%}
{% if f.accepts_multiple %} multiple{% endif %}{% if f.required %} required{% endif %}
{%- endmacro -%}
{%- macro widget(f) -%}
{% if f.widget_kind == kinds.TEXT_AREA %}
<textarea id="{{ f.name }}" name="{{ f.name }}" placeholder="{{ f.placeholder }}" maxlength="{{ f.max_length }}"{{ flags(f) }}>{{ f.default_value or '' }}</textarea>
{% elif f.widget_kind == kinds.TEXT %}
<input type="text" id="{{ f.name }}" name="{{ f.name }}" placeholder="{{ f.placeholder }}" maxlength="{{ f.max_length }}"{% if f.default_value is not none %} value="{{ f.default_value }}"{% endif %}{{ flags(f) }}>
{% elif f.widget_kind == kinds.PASSWORD %}
<input type="password" id="{{ f.name }}" name="{{ f.name }}" placeholder="{{ f.placeholder }}" maxlength="{{ f.max_length }}"{{ flags(f) }}>
{% elif f.widget_kind == kinds.NUMBER %}
<input type="number" step="1" id="{{ f.name }}" name="{{ f.name }}" placeholder="{{ f.placeholder }}"{% if f.default_value is not none %} value="{{ f.default_value }}"{% endif %}{{ flags(f) }}>
{% elif f.widget_kind == kinds.DATE %}
<input type="date" id="{{ f.name }}" name="{{ f.name }}"{% if f.default_value is not none %} value="{{ f.default_value }}"{% endif %}{{ flags(f) }}>
{% elif f.widget_kind == kinds.DROPDOWN %}
<select id="{{ f.name }}" name="{{ f.name }}"{{ flags(f) }}>
{% for option in f.options %}
<option value="{{ option }}"{% if option == f.default_value %} selected{% endif %}>{{ pretty(option) }}</option>
{% endfor %}
</select>
{% elif f.widget_kind == kinds.RADIO %}
{% for option in f.options %}
<div>
<input type="radio" id="{{ f.name }}_{{ loop.index0 }}" name="{{ f.name }}" value="{{ option }}"{% if option == f.default_value %} checked{% endif %}{% if f.required %} required{% endif %}>
<label for="{{ f.name }}_{{ loop.index0 }}">{{ option }}</label>
</div>
{% endfor %}
{% endif %}
{%- endmacro -%}
{% if form.title %}
<h1>{{ form.title }}</h1>
{% endif %}
{% if form.htmx and form.htmx.render_target %}
<div id="{{ form.htmx.render_target }}"></div>
{% endif %}
{% if form.htmx %}
<form hx-{{ form.method.value | lower }}="{{ form.action }}" hx-swap="{{ form.htmx.swap }}" hx-target="{{ form.htmx.target }}">
{% else %}
<form action="{{ form.action }}" method="{{ form.method.value }}">
{% endif %}
{% if form.csrf_enabled %}
<input type="hidden" name="csrf_token" value="{{ csrf_token }}">
{% endif %}
{% for f in form.fields %}
{% if form.wrapper_class %}
<div class="{{ form.wrapper_class }}">
{% endif %}
{% if render_labels and f.label %}
<label for="{{ f.name }}">{{ f.label }}:</label>
{% endif %}
{{ widget(f) }}
{% if form.wrapper_class %}
</div>
{% endif %}
{% endfor %}
<button type="submit">{{ form.submit_text }}</button>
</form>
"""


class FormRenderer:
    """Turn a FormModel into HTML. Output is escaped by Jinja2."""

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment or Environment(
            autoescape=select_autoescape(default_for_string=True, default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(kinds=WidgetKind, pretty=pretty)
        self._template = self.env.from_string(FORM_HTML)

    def render(self, form: FormModel, render_labels: bool = True, csrf_token: Optional[str] = None) -> str:
        if form.csrf_enabled and not csrf_token:
            raise ValueError(f"Form for '{form.table}' has CSRF enabled but no token was supplied")
        return self._template.render(form=form, render_labels=render_labels, csrf_token=csrf_token).strip() + "\n"
