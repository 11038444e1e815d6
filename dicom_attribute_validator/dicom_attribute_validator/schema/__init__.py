"""Module rule documents and their JSON Schema.

This package only depends on the data and validation types, so rule
documents can be checked without loading any record.
"""

from .module_rules import (
    UNBOUNDED,
    AttributeRule,
    ModuleRules,
    SchemaIssue,
    load_module_rules,
    parse_module_rules,
)
