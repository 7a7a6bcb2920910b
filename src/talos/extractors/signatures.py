"""Classify query matches into signature variants and render them.

A query match arrives as a :data:`CaptureGroup`: capture name -> byte range in
the source.  Each grammar owns an ordered rule table; the first rule whose
required capture names are all present builds the signature, later rules are
never consulted.  A group that satisfies no rule produces nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Union

# capture name -> (start_byte, end_byte)
CaptureGroup = dict[str, tuple[int, int]]


# --------------------------------------------------------------------------
# Signature variants
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class Class:
    name: str

    def render(self) -> str:
        return f"class {self.name}"


@dataclass(frozen=True)
class Function:
    name: str
    params: str

    def render(self) -> str:
        return f"function {self.name}{self.params}"


@dataclass(frozen=True)
class Method:
    name: str
    params: str

    def render(self) -> str:
        return f"method {self.name}{self.params}"


@dataclass(frozen=True)
class ArrowFunction:
    name: str
    params: str

    def render(self) -> str:
        return f"const {self.name} = {self.params} =>"


@dataclass(frozen=True)
class FunctionExpression:
    name: str
    params: str

    def render(self) -> str:
        return f"const {self.name} = function {self.params}"


@dataclass(frozen=True)
class ClassSelector:
    name: str

    def render(self) -> str:
        return "." + self.name.lstrip(".")


@dataclass(frozen=True)
class IdSelector:
    name: str

    def render(self) -> str:
        return "#" + self.name.lstrip("#")


@dataclass(frozen=True)
class ElementSelector:
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class Keyframe:
    name: str

    def render(self) -> str:
        return f"@keyframes {self.name}"


@dataclass(frozen=True)
class CustomProperty:
    name: str  # includes the leading "--"

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class AtRule:
    name: str  # includes the leading "@"

    def render(self) -> str:
        return self.name


Signature = Union[
    Class, Function, Method, ArrowFunction, FunctionExpression,
    ClassSelector, IdSelector, ElementSelector, Keyframe, CustomProperty, AtRule,
]


# --------------------------------------------------------------------------
# Text extraction
# --------------------------------------------------------------------------

def extract_text(source: bytes, span: tuple[int, int]) -> str:
    """Return the trimmed source text for *span*.

    A span that is out of bounds or does not fall on UTF-8 character
    boundaries yields ``""``.
    """
    start, end = span
    if start < 0 or end < start or end > len(source):
        return ""
    try:
        return source[start:end].decode("utf-8").strip()
    except UnicodeDecodeError:
        return ""


# --------------------------------------------------------------------------
# Rule tables
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """Build a signature when every name in ``requires`` was captured."""

    requires: tuple[str, ...]
    build: Callable[[CaptureGroup, bytes], Signature]

    def applies(self, group: CaptureGroup) -> bool:
        return all(name in group for name in self.requires)


def _named(variant: Callable[[str], Signature], capture: str) -> Rule:
    return Rule(
        requires=(capture,),
        build=lambda group, source: variant(extract_text(source, group[capture])),
    )


def _with_params(variant: Callable[[str, str], Signature], name: str, params: str) -> Rule:
    return Rule(
        requires=(name, params),
        build=lambda group, source: variant(
            extract_text(source, group[name]),
            extract_text(source, group[params]),
        ),
    )


def _variable_function(group: CaptureGroup, source: bytes) -> Signature:
    name = extract_text(source, group["vname"])
    params = extract_text(source, group["vparams"])
    if "is_arrow" in group:
        return ArrowFunction(name, params)
    return FunctionExpression(name, params)


SCRIPT_RULES: tuple[Rule, ...] = (
    _named(Class, "cname"),
    _with_params(Function, "fname", "fparams"),
    _with_params(Method, "mname", "mparams"),
    Rule(requires=("vname", "vparams"), build=_variable_function),
)

STYLE_RULES: tuple[Rule, ...] = (
    _named(ClassSelector, "css_class"),
    _named(IdSelector, "css_id"),
    _named(ElementSelector, "css_element"),
    _named(Keyframe, "keyframe_name"),
    _named(CustomProperty, "css_property"),
    _named(AtRule, "at_rule_name"),
)


def classify(group: CaptureGroup, source: bytes, rules: Iterable[Rule]) -> Signature | None:
    """Return the signature built by the first applicable rule, if any."""
    for rule in rules:
        if rule.applies(group):
            return rule.build(group, source)
    return None


def dedupe_sorted(signatures: Iterable[str]) -> list[str]:
    """Unique signatures in code-point (UTF-8 byte) order."""
    return sorted(set(signatures))
