# telerelay/services/template_service.py
"""
Per-recipient message templating.

A placeholder is a recipient field name, either bare (`firstName`) or in
braces (`{{firstName}}`). There is no escaping: a bare field name that
also appears as an ordinary word will be replaced too.
"""
import re
from typing import Literal, Mapping

TemplateStyle = Literal["literal", "legacy"]


def render(template: str, fields: Mapping[str, str]) -> str:
    """
    Replace every placeholder in a single pass.

    Longer field names are tried before shorter ones, so `firstNameLong`
    is not split by a `firstName` field. Substituted values are never
    scanned again.
    """
    names = sorted((name for name in fields if name), key=len, reverse=True)
    if not names:
        return template

    alternation = "|".join(re.escape(name) for name in names)
    pattern = re.compile(r"\{\{\s*(%s)\s*\}\}|(%s)" % (alternation, alternation))

    def _substitute(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        return str(fields[name])

    return pattern.sub(_substitute, template)


def render_legacy(template: str, fields: Mapping[str, str]) -> str:
    """
    Compatibility renderer for the original broadcast behaviour.

    Each matching field restarts from the untouched template and replaces
    only its first occurrence, so only the last matching field in
    iteration order shows up in the output.
    """
    rendered = template
    for name, value in fields.items():
        if name and name in rendered:
            rendered = template.replace(name, str(value), 1)
    return rendered


def render_for_style(template: str, fields: Mapping[str, str], style: TemplateStyle = "literal") -> str:
    if style == "legacy":
        return render_legacy(template, fields)
    return render(template, fields)
