# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Go language plugin."""

from treeq.languages.base import (
    BaseLanguagePlugin,
    DocCommentPattern,
    LanguageConfig,
    TreeSitterQueries,
)

# const/var declarations are anchored to source_file so that locals declared
# inside function bodies stay out of the catalog. Grouped var blocks nest
# their specs under a var_spec_list; grouped consts do not.
GO_SYMBOLS_QUERY = """
(function_declaration
  name: (identifier) @name
  parameters: (parameter_list) @params
  result: (_)? @result) @function

(method_declaration
  receiver: (parameter_list) @receiver
  name: (field_identifier) @name
  parameters: (parameter_list) @params
  result: (_)? @result) @method

(type_declaration
  (type_spec
    name: (type_identifier) @name
    type: (_) @type_def)) @type

(type_declaration
  (type_alias
    name: (type_identifier) @name
    type: (_) @type_def)) @type

(source_file
  (const_declaration
    (const_spec
      name: (identifier) @name
      type: (_)? @type) @const))

(source_file
  (var_declaration
    (var_spec
      name: (identifier) @name
      type: (_)? @type) @var))

(source_file
  (var_declaration
    (var_spec_list
      (var_spec
        name: (identifier) @name
        type: (_)? @type) @var)))
"""

GO_OUTLINE_QUERY = """
(package_clause (package_identifier) @package)

(import_spec
  name: (_)? @alias
  path: (_) @path)

(function_declaration
  name: (identifier) @func_name) @function

(method_declaration
  receiver: (parameter_list
    (parameter_declaration
      type: (_) @receiver_type))
  name: (field_identifier) @method_name) @method

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (struct_type))) @struct

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (interface_type))) @interface

(type_declaration
  (type_alias
    name: (type_identifier) @type_name)) @type_alias

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: [(type_identifier) (qualified_type) (generic_type)])) @type_named

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (pointer_type))) @type_ptr

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: [(slice_type) (array_type)])) @type_slice

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (map_type))) @type_map

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (function_type))) @type_func

(type_declaration
  (type_spec
    name: (type_identifier) @type_name
    type: (channel_type))) @type_chan

(source_file
  (const_declaration
    (const_spec
      name: (identifier) @const_name) @const))

(source_file
  (var_declaration
    (var_spec
      name: (identifier) @var_name) @var))

(source_file
  (var_declaration
    (var_spec_list
      (var_spec
        name: (identifier) @var_name) @var)))
"""

# Patterns overlap on purpose (a called identifier is also an identifier);
# the projector keeps the most specific kind per position.
GO_REFS_QUERY = """
(call_expression
  function: (identifier) @call)

(call_expression
  function: (selector_expression
    field: (field_identifier) @call))

(composite_literal
  type: (type_identifier) @composite_type)

(composite_literal
  type: (qualified_type
    name: (type_identifier) @composite_type))

(type_identifier) @type_ref

(selector_expression
  field: (field_identifier) @field)

(short_var_declaration
  left: (expression_list (identifier) @short_var))

(identifier) @ident

(package_identifier) @package
"""

# (title, pattern) pairs printed by `treeq example-queries`
GO_EXAMPLE_QUERIES = [
    ("func: all function names", "(function_declaration name: (identifier) @name)"),
    (
        "func: functions returning error",
        '(function_declaration name: (identifier) @name result: (type_identifier) @result'
        ' (#eq? @result "error"))',
    ),
    (
        "method: methods with their receiver type",
        "(method_declaration receiver: (parameter_list (parameter_declaration"
        " type: (_) @receiver)) name: (field_identifier) @name)",
    ),
    (
        "struct: struct types",
        "(type_spec name: (type_identifier) @name type: (struct_type))",
    ),
    (
        "struct: fields with their types",
        "(field_declaration name: (field_identifier) @field type: (_) @type)",
    ),
    (
        "interface: interface types",
        "(type_spec name: (type_identifier) @name type: (interface_type))",
    ),
    ("import: import paths", "(import_spec path: (_) @path)"),
    (
        "call: calls to a package function",
        "(call_expression function: (selector_expression"
        " operand: (identifier) @pkg field: (field_identifier) @func))",
    ),
    (
        "call: panics",
        '(call_expression function: (identifier) @fn (#eq? @fn "panic")) @call',
    ),
    (
        "error: if err != nil checks",
        '(if_statement condition: (binary_expression left: (identifier) @err'
        ' right: (nil)) (#eq? @err "err")) @check',
    ),
    ("goroutine: go statements", "(go_statement) @go"),
    ("defer: defer statements", "(defer_statement) @defer"),
    ("comment: TODO comments", '((comment) @todo (#match? @todo "TODO"))'),
]


class GoPlugin(BaseLanguagePlugin):
    """Go language plugin.

    Supports:
    - Symbols: functions, methods, structs, interfaces, other types,
      constants and variables
    - Outline: package clause, imports and declarations
    - References: calls, type uses, field accesses, identifiers
    """

    def _create_config(self) -> LanguageConfig:
        return LanguageConfig(
            name="go",
            display_name="Go",
            aliases=["golang"],
            extensions=[".go"],
            tree_sitter_language="go",
            doc_comment_pattern=DocCommentPattern(
                line_prefixes=["//"],
            ),
        )

    def _create_tree_sitter_queries(self) -> TreeSitterQueries:
        """Create tree-sitter queries for Go symbols, outline and references."""
        return TreeSitterQueries(
            symbols=GO_SYMBOLS_QUERY,
            outline=GO_OUTLINE_QUERY,
            references=GO_REFS_QUERY,
            examples=list(GO_EXAMPLE_QUERIES),
        )
