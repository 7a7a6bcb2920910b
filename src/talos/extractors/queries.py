"""Tree-sitter query programs, one per grammar.

Capture names are the contract with the rule tables in ``signatures.py``.
"""

from __future__ import annotations

# Shared by the JavaScript, TypeScript and TSX grammars.
_SCRIPT_COMMON = """
(function_declaration
  name: (identifier) @fname
  parameters: (formal_parameters) @fparams)

(generator_function_declaration
  name: (identifier) @fname
  parameters: (formal_parameters) @fparams)

(method_definition
  name: (_) @mname
  parameters: (formal_parameters) @mparams)

(variable_declarator
  name: (identifier) @vname
  value: (arrow_function
    parameters: (formal_parameters) @vparams) @is_arrow)

(variable_declarator
  name: (identifier) @vname
  value: (arrow_function
    parameter: (identifier) @vparams) @is_arrow)

(variable_declarator
  name: (identifier) @vname
  value: (function_expression
    parameters: (formal_parameters) @vparams))
"""

JAVASCRIPT_QUERY = """
(class_declaration
  name: (identifier) @cname)
""" + _SCRIPT_COMMON

TYPESCRIPT_QUERY = """
(class_declaration
  name: (type_identifier) @cname)

(abstract_class_declaration
  name: (type_identifier) @cname)

(function_signature
  name: (identifier) @fname
  parameters: (formal_parameters) @fparams)
""" + _SCRIPT_COMMON

CSS_QUERY = """
(class_selector (class_name) @css_class)

(id_selector (id_name) @css_id)

(tag_name) @css_element

(keyframes_statement (keyframes_name) @keyframe_name)

(declaration
  (property_name) @css_property
  (#match? @css_property "^--"))

(at_rule (at_keyword) @at_rule_name)

(media_statement "@media" @at_rule_name . (_) @at_rule_name)

(supports_statement "@supports" @at_rule_name . (_) @at_rule_name)
"""
