"""ICU MessageFormat-style formatter.

Supports a subset of ICU MessageFormat:

- Plural: {count, plural, =0 {no items} one {# item} other {# items}}
- Select: {gender, select, male {He} female {She} other {They}}
- Selectordinal: {place, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
- Simple variables: {name}

Patterns nest to any depth. Anything that cannot be resolved (unbalanced
braces, missing values, no matching clause) is left verbatim.
"""

import re
from typing import Any, List, Mapping, Optional, Tuple

from bakery.i18n.formatters.base import Formatter, is_number, stringify
from bakery.i18n.plurals import CLDRPluralResolver

_PATTERN = re.compile(r"\{\s*(\w+)\s*,\s*(plural|selectordinal|select)\s*,\s*")
_SIMPLE_VARIABLE = re.compile(r"\{(\w+)\}")

Clause = Tuple[str, str]


class ICUMessageFormatter(Formatter):
    """Formatter for ICU-style messages.

    Plural and ordinal categories come from CLDR rules for the locale passed
    to interpolate(), or ``locale`` when none is given.

    Example:
        >>> formatter = ICUMessageFormatter("en")
        >>> formatter.interpolate("{count, plural, one {# item} other {# items}}", {"count": 5})
        '5 items'
    """

    def __init__(self, locale: str = "en", plural_rules: Optional[CLDRPluralResolver] = None):
        self.locale = locale
        self.plural_rules = plural_rules or CLDRPluralResolver(default_locale=locale)

    def set_locale(self, locale: str) -> None:
        self.locale = locale

    def interpolate(
        self,
        template: str,
        variables: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        if not template:
            return template
        variables = variables or {}
        text = self._resolve_patterns(template, variables, locale or self.locale)
        return self._substitute_variables(text, variables)

    def _resolve_patterns(self, text: str, variables: Mapping[str, Any], locale: str) -> str:
        cursor = 0
        while True:
            match = _PATTERN.search(text, cursor)
            if match is None:
                return text

            start = match.start()
            closing = _find_matching_brace(text, start)
            if closing == -1:
                cursor = match.end()
                continue

            name, kind = match.group(1), match.group(2)
            options = text[match.end():closing]
            replacement = self._select(kind, variables.get(name), options, locale)
            if replacement is None:
                # unresolved patterns stay verbatim, nested ones included
                cursor = closing + 1
                continue

            text = text[:start] + replacement + text[closing + 1:]
            cursor = start

    def _select(self, kind: str, value: Any, options: str, locale: str) -> Optional[str]:
        clauses = _parse_clauses(options)
        if not clauses:
            return None

        if kind == "select":
            if value is None:
                return None
            return _find_clause(clauses, stringify(value), "other")

        if not is_number(value):
            return None

        body = _find_exact_clause(clauses, value)
        if body is None:
            if kind == "plural":
                category = self.plural_rules.get_category(value, locale)
            else:
                category = self.plural_rules.get_ordinal_category(value, locale)
            body = _find_clause(clauses, category, "other")
        if body is None:
            return None
        return _replace_hash(body, stringify(value))

    @staticmethod
    def _substitute_variables(text: str, variables: Mapping[str, Any]) -> str:
        def replace(match: "re.Match[str]") -> str:
            value = variables.get(match.group(1))
            return match.group(0) if value is None else stringify(value)

        return _SIMPLE_VARIABLE.sub(replace, text)


def _find_matching_brace(text: str, open_pos: int) -> int:
    """Index of the brace closing the one at ``open_pos``, or -1."""
    depth = 0
    for pos in range(open_pos, len(text)):
        char = text[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos
    return -1


def _parse_clauses(options: str) -> Optional[List[Clause]]:
    """Split ``selector {body} selector {body} ...`` at the top level.

    Returns None when the option list is malformed.
    """
    clauses: List[Clause] = []
    pos, length = 0, len(options)
    while True:
        pos = _skip_whitespace(options, pos)
        if pos >= length:
            return clauses

        start = pos
        while pos < length and not options[pos].isspace() and options[pos] not in "{}":
            pos += 1
        selector = options[start:pos]
        if selector == "=":
            # "= 0 {...}" is accepted as "=0 {...}"
            pos = _skip_whitespace(options, pos)
            digits_start = pos
            while pos < length and not options[pos].isspace() and options[pos] not in "{}":
                pos += 1
            selector += options[digits_start:pos]
        if not selector:
            return None

        pos = _skip_whitespace(options, pos)
        if pos >= length or options[pos] != "{":
            return None
        closing = _find_matching_brace(options, pos)
        if closing == -1:
            return None
        clauses.append((selector, options[pos + 1:closing]))
        pos = closing + 1


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _find_exact_clause(clauses: List[Clause], value: Any) -> Optional[str]:
    for selector, body in clauses:
        if not selector.startswith("="):
            continue
        try:
            if float(selector[1:]) == value:
                return body
        except ValueError:
            continue
    return None


def _find_clause(clauses: List[Clause], *selectors: str) -> Optional[str]:
    for wanted in selectors:
        for selector, body in clauses:
            if selector == wanted:
                return body
    return None


def _replace_hash(body: str, number: str) -> str:
    """Replace '#' with ``number`` outside nested plural/selectordinal patterns."""
    parts: List[str] = []
    pos = 0
    while pos < len(body):
        char = body[pos]
        if char == "{":
            nested = _PATTERN.match(body, pos)
            if nested is not None and nested.group(2) != "select":
                closing = _find_matching_brace(body, pos)
                if closing != -1:
                    parts.append(body[pos:closing + 1])
                    pos = closing + 1
                    continue
        parts.append(number if char == "#" else char)
        pos += 1
    return "".join(parts)
