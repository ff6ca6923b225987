"""
Parser for issue bodies submitted through a GitHub issue form.

GitHub renders each form field as a level-3 heading carrying the field's
label, followed by the submitted value.  The form template is used to map
those labels back to field ids and to decide how each value is parsed.
"""
import re
import logging

import yaml


__all__ = ["load_template", "parse_issue_form"]


logger = logging.getLogger(__name__)


NO_RESPONSE = "_No response_"

_HEADING_RE = re.compile(r"^###[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_CHECKBOX_RE = re.compile(r"^\s*[-*][ \t]+\[([ xX])\][ \t]*(.*?)\s*$")
_CODE_FENCE_RE = re.compile(r"^```[^\n]*\n(.*?)\n?```$", re.DOTALL)
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def load_template(path):
    with open(path, "r", encoding="utf-8") as file:
        return file.read()


def parse_issue_form(body, template=None):
    """
    Parse an issue body into a dict of field id to value.

    Values are strings, lists of strings (dropdowns) or dicts with
    "selected" and "unselected" lists (checkboxes).  Fields left empty
    are omitted.

    Parameters
    ----------
    body : str
        Markdown body of the issue.
    template : str or dict, optional
        Issue form template, as YAML text or already loaded.  Without one,
        fields are keyed by a slug of their heading.
    """
    items_by_label = _get_template_items(template)

    result = {}
    for heading, content in _split_sections(body or ""):
        item = items_by_label.get(heading)
        if item is not None:
            field_id = item.get("id") or _slugify(heading)
        else:
            field_id = _slugify(heading)
            logger.debug("Heading %r not found in template, using id %s", heading, field_id)

        value = _parse_value(content, item)
        if value is not None:
            result[field_id] = value

    return result


def _get_template_items(template):
    if template is None:
        return {}

    if isinstance(template, str):
        template = yaml.safe_load(template) or {}

    items_by_label = {}
    for item in template.get("body") or []:
        if item.get("type") == "markdown":
            continue
        label = (item.get("attributes") or {}).get("label")
        if label:
            items_by_label[label.strip()] = item

    return items_by_label


def _split_sections(body):
    body = body.replace("\r\n", "\n")
    matches = list(_HEADING_RE.finditer(body))

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(body)
        yield match.group(1), body[match.end() : end].strip()


def _parse_value(content, item):
    if not content or content == NO_RESPONSE:
        return None

    if item is None:
        field_type = "checkboxes" if _is_task_list(content) else "textarea"
        attributes = {}
    else:
        field_type = item.get("type")
        attributes = item.get("attributes") or {}

    if field_type == "checkboxes":
        return _parse_checkboxes(content)
    elif field_type == "dropdown":
        if attributes.get("multiple"):
            return [v.strip() for v in content.split(", ") if v.strip()]
        else:
            return [content]
    elif field_type == "textarea" and attributes.get("render"):
        match = _CODE_FENCE_RE.match(content)
        if match:
            return match.group(1)
        return content
    else:
        return content


def _is_task_list(content):
    return all(_CHECKBOX_RE.match(line) for line in content.split("\n") if line.strip())


def _parse_checkboxes(content):
    selected = []
    unselected = []

    for line in content.split("\n"):
        match = _CHECKBOX_RE.match(line)
        if not match:
            continue
        if match.group(1) == " ":
            unselected.append(match.group(2))
        else:
            selected.append(match.group(2))

    return {"selected": selected, "unselected": unselected}


def _slugify(value):
    return _SLUG_RE.sub("-", value.lower()).strip("-")
